from inspect import isgenerator

from socialdb.data.entity import createEntity, getEntities
from socialdb.data.setting import getPrivateSettings
from socialdb.exceptions import FeatureError
from socialdb.model.factory import APIFactory
from socialdb.query.entities import EntityQuery


class EntityAPI(object):
    """The public API for L{Entity}s in the model layer.

    @param factory: Optionally, the API factory to use when creating internal
        APIs.  Default is L{APIFactory}.
    """

    def __init__(self, factory=None):
        self._factory = factory or APIFactory()

    def create(self, type, subtype=None, ownerGUID=0, containerGUID=None):
        """Create a new L{Entity}.

        @param type: The L{EntityType} of the new entity.
        @param subtype: Optionally, the subtype of the new entity.
        @param ownerGUID: Optionally, the L{Entity.guid} of the owner.
        @param containerGUID: Optionally, the L{Entity.guid} of the
            container.  Defaults to C{ownerGUID}.
        @raise MalformedSubtypeError: Raised if C{subtype} is not valid.
        @return: The L{Entity.guid} of the new entity.
        """
        entity = createEntity(type, subtype, ownerGUID, containerGUID)
        return entity.guid

    def exists(self, guid):
        """Determine if an L{Entity} exists.

        @param guid: The L{Entity.guid} to check.
        @return: C{True} if the entity exists, otherwise C{False}.
        """
        return not getEntities(guids=[guid]).is_empty()

    def get(self, **options):
        """Get L{Entity}s matching filtering criteria.

        See L{EntityQuery} for the supported options.

        @return: A C{list} of L{Entity}s or their C{int} count if the
            C{count} option is set.
        """
        return EntityQuery(**options).run()

    def delete(self, guids):
        """Delete L{Entity}s and all their private settings.

        @param guids: A sequence of L{Entity.guid}s to delete.
        @raise FeatureError: Raised if the given list of GUIDs is empty.
        @return: The number of entities deleted.
        """
        if isgenerator(guids):
            guids = list(guids)
        if not guids:
            raise FeatureError("Can't delete an empty list of entities.")
        getPrivateSettings(entityGUIDs=guids).remove()
        return getEntities(guids=guids).remove()
