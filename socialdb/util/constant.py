from storm.locals import Enum


class Constant(object):
    """A named value in an enumeration.

    @param id: The integer stored in the database for this constant.
    @param name: The upper-case name of the constant.
    """

    def __init__(self, id, name):
        self.id = id
        self.name = name

    def __str__(self):
        return self.name.lower()

    def __repr__(self):
        return '<Constant id=%s name=%s>' % (self.id, self.name)


class EnumBase(object):
    """Base class for enumerations made of L{Constant} class attributes."""

    @classmethod
    def getConstants(cls):
        """Get the L{Constant}s defined by this enumeration.

        @return: A C{list} of L{Constant}s sorted by ID.
        """
        constants = [value for value in vars(cls).values()
                     if isinstance(value, Constant)]
        return sorted(constants, key=lambda constant: constant.id)

    @classmethod
    def fromName(cls, name):
        """Get the L{Constant} with the given name, ignoring case.

        @raise LookupError: Raised if no constant has the given name.
        """
        for constant in cls.getConstants():
            if constant.name == name.upper():
                return constant
        raise LookupError(name)


class ConstantEnum(Enum):
    """A Storm property that stores L{Constant}s as their integer IDs.

    @param name: Optionally, the name of the column.
    @param enum_class: The L{EnumBase} subclass with the valid constants.
    @param primary: True if this property represents a primary key.
    """

    def __init__(self, name=None, enum_class=None, primary=False, **kwargs):
        kwargs['map'] = dict((constant, constant.id)
                             for constant in enum_class.getConstants())
        super(ConstantEnum, self).__init__(name=name, primary=primary,
                                           **kwargs)
