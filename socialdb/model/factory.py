class APIFactory(object):
    """Factory creates concrete model API instances."""

    def entities(self):
        """Get a new L{EntityAPI} instance."""
        from socialdb.model.entity import EntityAPI
        return EntityAPI(factory=self)

    def privateSettings(self):
        """Get a new L{PrivateSettingAPI} instance."""
        from socialdb.model.setting import PrivateSettingAPI
        return PrivateSettingAPI(factory=self)
