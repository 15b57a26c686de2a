import json

from socialdb.cache.cache import BaseCache, CacheResult
from socialdb.cache.factory import CachingAPIFactory
from socialdb.model.setting import PrivateSettingAPI


class CachingPrivateSettingAPI(object):
    """The public API to cached L{PrivateSetting}-related logic in the model.

    The complete set of private settings for an entity is cached as a single
    value, which is dropped whenever one of the entity's settings changes.
    """

    def __init__(self):
        self._api = PrivateSettingAPI(factory=CachingAPIFactory())
        self._cache = PrivateSettingCache()

    def get(self, entityGUID, name):
        """Get the value of a private setting.

        The value is taken from the cached settings for the entity when
        they're available, otherwise it's fetched from the database.

        See L{PrivateSettingAPI.get} for more details.
        """
        cached = self._cache.get(entityGUID)
        if cached.results is not None and name in cached.results:
            return cached.results[name]
        return self._api.get(entityGUID, name)

    def getAll(self, entityGUID):
        """Get all the private settings of an entity.

        Cache misses are fetched from the database and added to the cache.

        See L{PrivateSettingAPI.getAll} for more details.
        """
        cached = self._cache.get(entityGUID)
        if cached.results is not None:
            return cached.results
        result = self._api.getAll(entityGUID)
        self._cache.save(entityGUID, result)
        return result

    def set(self, entityGUID, name, value):
        """See L{PrivateSettingAPI.set}."""
        self._cache.clear(entityGUID)
        return self._api.set(entityGUID, name, value)

    def delete(self, entityGUID, name):
        """See L{PrivateSettingAPI.delete}."""
        self._cache.clear(entityGUID)
        return self._api.delete(entityGUID, name)

    def deleteAll(self, entityGUID):
        """See L{PrivateSettingAPI.deleteAll}."""
        self._cache.clear(entityGUID)
        return self._api.deleteAll(entityGUID)

    def getEntities(self, **options):
        """See L{PrivateSettingAPI.getEntities}."""
        return self._api.getEntities(**options)


class PrivateSettingCache(BaseCache):
    """Provides caching functions for the L{CachingPrivateSettingAPI} class."""

    keyPrefix = 'private-settings:'

    def get(self, entityGUID):
        """Get the cached private settings of an entity.

        @param entityGUID: The L{Entity.guid} to get settings for.
        @return: A L{CacheResult} with a C{dict} mapping setting names to
            values in the C{results} field, or C{None} and the GUID in the
            C{uncachedValues} field if the settings aren't cached.
        """
        result = self.getValues([entityGUID])
        if result is None or result == [None]:
            return CacheResult(None, [entityGUID])
        return CacheResult(json.loads(result[0]), [])

    def save(self, entityGUID, settings):
        """Store the private settings of an entity in the cache.

        @param entityGUID: The L{Entity.guid} the settings belong to.
        @param settings: A C{dict} mapping setting names to values.
        """
        self.setValues({entityGUID: json.dumps(settings)})

    def clear(self, entityGUIDs):
        """Delete cached private settings.

        @param entityGUIDs: An L{Entity.guid} or a sequence of them.
        """
        if not isinstance(entityGUIDs, (list, tuple, set)):
            entityGUIDs = [entityGUIDs]
        self.deleteValues(list(entityGUIDs))
