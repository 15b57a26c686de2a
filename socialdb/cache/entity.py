from inspect import isgenerator

from socialdb.cache.factory import CachingAPIFactory
from socialdb.cache.setting import PrivateSettingCache
from socialdb.model.entity import EntityAPI


class CachingEntityAPI(object):
    """The public API to cached L{Entity}-related functionality."""

    def __init__(self):
        self._api = EntityAPI(factory=CachingAPIFactory())

    def create(self, type, subtype=None, ownerGUID=0, containerGUID=None):
        """See L{EntityAPI.create}."""
        return self._api.create(type, subtype, ownerGUID, containerGUID)

    def exists(self, guid):
        """See L{EntityAPI.exists}."""
        return self._api.exists(guid)

    def get(self, **options):
        """See L{EntityAPI.get}."""
        return self._api.get(**options)

    def delete(self, guids):
        """Delete L{Entity}s and drop their cached private settings.

        See L{EntityAPI.delete} for more details.
        """
        if isgenerator(guids):
            guids = list(guids)
        PrivateSettingCache().clear(guids)
        return self._api.delete(guids)
