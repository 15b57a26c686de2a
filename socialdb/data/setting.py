from storm.locals import Storm, Int, Unicode, Reference

from socialdb.data.exceptions import MalformedSettingNameError
from socialdb.data.store import getMainStore


MAX_NAME_LENGTH = 128


def isValidSettingName(name):
    """Determine if C{name} can be used as a L{PrivateSetting.name}.

    @param name: A C{str} name to validate.
    @return: C{True} if C{name} is between 1 and 128 characters long,
        otherwise C{False}.
    """
    return isinstance(name, str) and 0 < len(name) <= MAX_NAME_LENGTH


class PrivateSetting(Storm):
    """An opaque name/value pair attached to an L{Entity}.

    Private settings hold configuration for plugins and users.  They're never
    exported and only one value exists for each name on an entity.

    @param entityGUID: The L{Entity.guid} the setting belongs to.
    @param name: The C{str} name of the setting.
    @param value: The C{str} value of the setting.
    """

    __storm_table__ = 'private_settings'

    id = Int('id', primary=True, allow_none=False)
    entityGUID = Int('entity_guid', allow_none=False)
    name = Unicode('name', allow_none=False)
    value = Unicode('value', allow_none=False)

    entity = Reference(entityGUID, 'Entity.guid')

    def __init__(self, entityGUID, name, value):
        self.entityGUID = entityGUID
        self.name = name
        self.value = value


def createPrivateSetting(entityGUID, name, value):
    """Create a new L{PrivateSetting}.

    @param entityGUID: The L{Entity.guid} the setting belongs to.
    @param name: The C{str} name of the setting.
    @param value: The C{str} value of the setting.
    @raise MalformedSettingNameError: Raised if C{name} is not valid.
    @return: A L{PrivateSetting} instance, added to the database.
    """
    if not isValidSettingName(name):
        raise MalformedSettingNameError(name)
    store = getMainStore()
    return store.add(PrivateSetting(entityGUID, name, value))


def getPrivateSettings(entityGUIDs=None, names=None):
    """Get L{PrivateSetting}s.

    @param entityGUIDs: Optionally, a sequence of L{Entity.guid}s to filter
        the result with.
    @param names: Optionally, a sequence of L{PrivateSetting.name}s to filter
        the result with.
    @return: A C{ResultSet} with matching L{PrivateSetting}s.
    """
    store = getMainStore()
    where = []
    if entityGUIDs:
        where.append(PrivateSetting.entityGUID.is_in(entityGUIDs))
    if names:
        where.append(PrivateSetting.name.is_in(names))
    return store.find(PrivateSetting, *where)


def toSettingValue(value):
    """Convert a value to the string form private settings are stored in.

    @param value: The value to convert.
    @return: C{''} for C{None} and C{False}, C{'1'} for C{True} and the
        C{str} form of anything else.
    """
    if value is None or value is False:
        return ''
    if value is True:
        return '1'
    return str(value)
