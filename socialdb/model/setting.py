from socialdb.data.exceptions import MalformedSettingNameError
from socialdb.data.setting import (
    createPrivateSetting, getPrivateSettings, isValidSettingName,
    toSettingValue)
from socialdb.model.exceptions import UnknownEntityError
from socialdb.model.factory import APIFactory
from socialdb.query.options import (
    ANY_VALUE, mergeClauses, normalizePluralOptions)
from socialdb.query.settings import PrivateSettingFilter


PLUGIN_USER_SETTING_PREFIX = 'plugin:user_setting:'

SETTING_OPTIONS = {
    'privateSettingNames': ANY_VALUE,
    'privateSettingValues': ANY_VALUE,
    'privateSettingNameValuePairs': ANY_VALUE,
    'privateSettingNameValuePairsOperator': 'AND',
    'privateSettingNamePrefix': '',
}

SINGULAR_SETTING_OPTIONS = ['privateSettingName', 'privateSettingValue',
                            'privateSettingNameValuePair']


def getPluginUserSettingPrefix(pluginID):
    """Get the name prefix used for a plugin's user settings.

    Plugins store per-user configuration as private settings on the user
    entity, namespaced with this prefix.

    @param pluginID: The ID of the plugin.
    @return: A C{str} prefix, such as C{plugin:user_setting:blog:}.
    """
    return '%s%s:' % (PLUGIN_USER_SETTING_PREFIX, pluginID)


class PrivateSettingAPI(object):
    """The public API for L{PrivateSetting}s in the model layer.

    @param factory: Optionally, the API factory to use when creating internal
        APIs.  Default is L{APIFactory}.
    """

    def __init__(self, factory=None):
        self._factory = factory or APIFactory()

    def get(self, entityGUID, name):
        """Get the value of a private setting.

        @param entityGUID: The L{Entity.guid} the setting belongs to.
        @param name: The name of the setting.
        @return: The C{str} value of the setting or C{None} if either the
            setting or the entity don't exist.
        """
        if not self._factory.entities().exists(entityGUID):
            return None
        setting = getPrivateSettings(entityGUIDs=[entityGUID],
                                     names=[name]).one()
        return None if setting is None else setting.value

    def getAll(self, entityGUID):
        """Get all the private settings of an entity.

        @param entityGUID: The L{Entity.guid} to get settings for.
        @return: A C{dict} mapping setting names to values.  It's empty if
            the entity doesn't exist or doesn't have any settings.
        """
        if not self._factory.entities().exists(entityGUID):
            return {}
        return dict((setting.name, setting.value)
                    for setting in getPrivateSettings(
                        entityGUIDs=[entityGUID]))

    def set(self, entityGUID, name, value):
        """Set or update a private setting.

        @param entityGUID: The L{Entity.guid} the setting belongs to.
        @param name: The name of the setting.
        @param value: The value to store.  It's converted to a string,
            C{None} and C{False} are stored as an empty string and C{True}
            as C{'1'}.
        @raise MalformedSettingNameError: Raised if C{name} is not valid.
        @raise UnknownEntityError: Raised if the entity doesn't exist.
        """
        if not isValidSettingName(name):
            raise MalformedSettingNameError(name)
        if not self._factory.entities().exists(entityGUID):
            raise UnknownEntityError([entityGUID])

        value = toSettingValue(value)
        setting = getPrivateSettings(entityGUIDs=[entityGUID],
                                     names=[name]).one()
        if setting is None:
            createPrivateSetting(entityGUID, name, value)
        else:
            setting.value = value

    def delete(self, entityGUID, name):
        """Delete a private setting.

        @param entityGUID: The L{Entity.guid} the setting belongs to.
        @param name: The name of the setting.
        @return: The number of settings deleted.
        """
        return getPrivateSettings(entityGUIDs=[entityGUID],
                                  names=[name]).remove()

    def deleteAll(self, entityGUID):
        """Delete all the private settings of an entity.

        @param entityGUID: The L{Entity.guid} to delete settings for.
        @return: The number of settings deleted.
        """
        return getPrivateSettings(entityGUIDs=[entityGUID]).remove()

    def getEntities(self, **options):
        """Get L{Entity}s based on their private settings.

        All the options supported by L{EntityAPI.get} are accepted, as well
        as the following, each with a singular shortcut where noted:

          - C{privateSettingNames} (C{privateSettingName}): setting names.
          - C{privateSettingValues} (C{privateSettingValue}): setting values.
          - C{privateSettingNameValuePairs}
            (C{privateSettingNameValuePair}): name/value pairs, see
            L{PrivateSettingFilter}.  If multiple values are given for a pair
            the C{IN} operand is used.
          - C{privateSettingNameValuePairsOperator}: C{AND} (the default) or
            C{OR}, to combine pairs with.
          - C{privateSettingNamePrefix}: a prefix to apply to all setting
            names.

        @raise QueryError: Raised if the options are invalid.
        @return: A C{list} of L{Entity}s or their C{int} count if the
            C{count} option is set.
        """
        options = dict(SETTING_OPTIONS, **options)
        options = normalizePluralOptions(options, SINGULAR_SETTING_OPTIONS)
        settingFilter = PrivateSettingFilter(
            names=options.pop('privateSettingNames'),
            values=options.pop('privateSettingValues'),
            pairs=options.pop('privateSettingNameValuePairs'),
            pairOperator=options.pop('privateSettingNameValuePairsOperator'),
            namePrefix=options.pop('privateSettingNamePrefix'))
        joins, wheres = settingFilter.getClauses()
        options['wheres'] = mergeClauses(options.get('wheres'), wheres)
        options['joins'] = mergeClauses(options.get('joins'), joins)
        return self._factory.entities().get(**options)
