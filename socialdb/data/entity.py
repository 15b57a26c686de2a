import time

from storm.locals import Storm, Bool, Int, Unicode, AutoReload

from socialdb.data.exceptions import MalformedSubtypeError
from socialdb.data.store import getMainStore
from socialdb.util.constant import Constant, ConstantEnum, EnumBase


class EntityType(EnumBase):
    """Entity types.

    @cvar OBJECT: A piece of content, such as a blog post or a file.
    @cvar USER: A person with an account.
    @cvar GROUP: A group of users.
    @cvar SITE: The site itself.
    """

    OBJECT = Constant(1, 'OBJECT')
    USER = Constant(2, 'USER')
    GROUP = Constant(3, 'GROUP')
    SITE = Constant(4, 'SITE')


MAX_SUBTYPE_LENGTH = 50


class Entity(Storm):
    """A user, group, site or content object.

    @param type: The L{EntityType} of the entity.
    @param subtype: Optionally, the C{str} subtype, such as C{blog}.
    @param ownerGUID: The L{Entity.guid} of the owner, C{0} if nobody owns
        this entity.
    @param containerGUID: The L{Entity.guid} of the container.
    @param timeCreated: The creation time, as a UNIX timestamp.
    """

    __storm_table__ = 'entities'

    guid = Int('guid', primary=True, allow_none=False, default=AutoReload)
    type = ConstantEnum('type', enum_class=EntityType, allow_none=False)
    subtype = Unicode('subtype')
    ownerGUID = Int('owner_guid', allow_none=False)
    containerGUID = Int('container_guid', allow_none=False)
    enabled = Bool('enabled', allow_none=False)
    timeCreated = Int('time_created', allow_none=False)

    def __init__(self, type, subtype, ownerGUID, containerGUID, timeCreated):
        self.type = type
        self.subtype = subtype
        self.ownerGUID = ownerGUID
        self.containerGUID = containerGUID
        self.enabled = True
        self.timeCreated = timeCreated


def createEntity(type, subtype=None, ownerGUID=0, containerGUID=None,
                 timeCreated=None):
    """Create a new L{Entity}.

    @param type: The L{EntityType} of the entity.
    @param subtype: Optionally, a subtype for the entity.
    @param ownerGUID: Optionally, the L{Entity.guid} of the owner.
    @param containerGUID: Optionally, the L{Entity.guid} of the container.
        Defaults to C{ownerGUID}.
    @param timeCreated: Optionally, the creation time as a UNIX timestamp.
        Defaults to the current time.
    @raise MalformedSubtypeError: Raised if C{subtype} is empty or longer
        than 50 characters.
    @return: A new L{Entity} instance persisted in the main store.
    """
    if subtype is not None and not 0 < len(subtype) <= MAX_SUBTYPE_LENGTH:
        raise MalformedSubtypeError('%r is not a valid subtype.' % subtype)
    if containerGUID is None:
        containerGUID = ownerGUID
    if timeCreated is None:
        timeCreated = int(time.time())
    store = getMainStore()
    return store.add(Entity(type, subtype, ownerGUID, containerGUID,
                            timeCreated))


def getEntities(guids=None, types=None, subtypes=None, ownerGUIDs=None,
                containerGUIDs=None):
    """Get L{Entity}s.

    @param guids: Optionally, a sequence of L{Entity.guid}s to filter the
        result with.
    @param types: Optionally, a sequence of L{EntityType}s to filter the
        result with.
    @param subtypes: Optionally, a sequence of subtypes to filter the result
        with.
    @param ownerGUIDs: Optionally, a sequence of owner GUIDs to filter the
        result with.
    @param containerGUIDs: Optionally, a sequence of container GUIDs to
        filter the result with.
    @return: A C{ResultSet} with matching L{Entity}s.
    """
    store = getMainStore()
    where = []
    if guids:
        where.append(Entity.guid.is_in(guids))
    if types:
        where.append(Entity.type.is_in(types))
    if subtypes:
        where.append(Entity.subtype.is_in(subtypes))
    if ownerGUIDs:
        where.append(Entity.ownerGUID.is_in(ownerGUIDs))
    if containerGUIDs:
        where.append(Entity.containerGUID.is_in(containerGUIDs))
    return store.find(Entity, *where)
