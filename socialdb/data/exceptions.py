class MalformedSettingNameError(Exception):
    """
    Raised when an attempt to store a L{PrivateSetting} with an empty or
    overly long name is made.

    @param name: The rejected name.
    """

    def __init__(self, name):
        self.name = name

    def __str__(self):
        return '%r is not a valid private setting name.' % (self.name,)


class MalformedSubtypeError(Exception):
    """
    Raised when an attempt to create an L{Entity} with an empty or overly
    long subtype is made.
    """
