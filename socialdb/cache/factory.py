from socialdb.model.factory import APIFactory


class CachingAPIFactory(APIFactory):
    """Factory creates concrete caching API instances."""

    def entities(self):
        """Get a new L{CachingEntityAPI} instance."""
        from socialdb.cache.entity import CachingEntityAPI
        return CachingEntityAPI()

    def privateSettings(self):
        """Get a new L{CachingPrivateSettingAPI} instance."""
        from socialdb.cache.setting import CachingPrivateSettingAPI
        return CachingPrivateSettingAPI()
