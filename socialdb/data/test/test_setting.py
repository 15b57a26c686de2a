from storm.exceptions import IntegrityError

from socialdb.data.entity import EntityType, createEntity
from socialdb.data.exceptions import MalformedSettingNameError
from socialdb.data.setting import (
    PrivateSetting, createPrivateSetting, getPrivateSettings,
    isValidSettingName, toSettingValue)
from socialdb.testing.basic import SocialDBTestCase
from socialdb.testing.resources import DatabaseResource


class IsValidSettingNameTest(SocialDBTestCase):

    def testIsValidSettingName(self):
        """L{isValidSettingName} accepts names with 1 to 128 characters."""
        self.assertTrue(isValidSettingName('a'))
        self.assertTrue(isValidSettingName('plugin:user_setting:blog:x'))
        self.assertTrue(isValidSettingName('x' * 128))

    def testIsValidSettingNameWithEmptyName(self):
        """L{isValidSettingName} rejects empty names."""
        self.assertFalse(isValidSettingName(''))

    def testIsValidSettingNameWithLongName(self):
        """L{isValidSettingName} rejects names with over 128 characters."""
        self.assertFalse(isValidSettingName('x' * 129))

    def testIsValidSettingNameWithNonString(self):
        """L{isValidSettingName} rejects anything that isn't a C{str}."""
        self.assertFalse(isValidSettingName(None))
        self.assertFalse(isValidSettingName(42))


class ToSettingValueTest(SocialDBTestCase):

    def testToSettingValue(self):
        """L{toSettingValue} converts values to strings."""
        self.assertEqual('value', toSettingValue('value'))
        self.assertEqual('42', toSettingValue(42))
        self.assertEqual('1.5', toSettingValue(1.5))

    def testToSettingValueWithBooleans(self):
        """
        L{toSettingValue} stores C{True} as C{'1'} and C{False} as an empty
        string.
        """
        self.assertEqual('1', toSettingValue(True))
        self.assertEqual('', toSettingValue(False))

    def testToSettingValueWithNone(self):
        """L{toSettingValue} converts C{None} to an empty string."""
        self.assertEqual('', toSettingValue(None))


class CreatePrivateSettingTest(SocialDBTestCase):

    resources = [('store', DatabaseResource())]

    def testCreatePrivateSetting(self):
        """L{createPrivateSetting} creates a new L{PrivateSetting}."""
        entity = createEntity(EntityType.USER)
        setting = createPrivateSetting(entity.guid, 'language', 'en')
        self.assertEqual(entity.guid, setting.entityGUID)
        self.assertIdentical(entity, setting.entity)
        self.assertEqual('language', setting.name)
        self.assertEqual('en', setting.value)

    def testCreatePrivateSettingAddsToStore(self):
        """
        L{createPrivateSetting} automatically adds the new L{PrivateSetting}
        to the database.
        """
        entity = createEntity(EntityType.USER)
        setting = createPrivateSetting(entity.guid, 'language', 'en')
        self.assertIdentical(setting, self.store.find(PrivateSetting).one())

    def testCreatePrivateSettingWithMalformedName(self):
        """
        L{createPrivateSetting} raises a L{MalformedSettingNameError} if an
        invalid name is provided.
        """
        entity = createEntity(EntityType.USER)
        error = self.assertRaises(MalformedSettingNameError,
                                  createPrivateSetting, entity.guid, '', 'x')
        self.assertEqual("'' is not a valid private setting name.",
                         str(error))


class GetPrivateSettingsTest(SocialDBTestCase):

    resources = [('store', DatabaseResource())]

    def testGetPrivateSettings(self):
        """
        L{getPrivateSettings} returns all L{PrivateSetting}s in the database,
        by default.
        """
        entity = createEntity(EntityType.USER)
        setting1 = createPrivateSetting(entity.guid, 'name1', 'value1')
        setting2 = createPrivateSetting(entity.guid, 'name2', 'value2')
        result = getPrivateSettings().order_by(PrivateSetting.name)
        self.assertEqual([setting1, setting2], list(result))

    def testGetPrivateSettingsWithEntityGUIDs(self):
        """
        When L{Entity.guid}s are provided L{getPrivateSettings} returns the
        L{PrivateSetting}s of those entities.
        """
        entity1 = createEntity(EntityType.USER)
        entity2 = createEntity(EntityType.USER)
        setting = createPrivateSetting(entity1.guid, 'name', 'value')
        createPrivateSetting(entity2.guid, 'name', 'value')
        result = getPrivateSettings(entityGUIDs=[entity1.guid])
        self.assertIdentical(setting, result.one())

    def testGetPrivateSettingsWithNames(self):
        """
        When names are provided L{getPrivateSettings} returns matching
        L{PrivateSetting}s.
        """
        entity = createEntity(EntityType.USER)
        setting = createPrivateSetting(entity.guid, 'name1', 'value')
        createPrivateSetting(entity.guid, 'name2', 'value')
        result = getPrivateSettings(names=['name1'])
        self.assertIdentical(setting, result.one())


class PrivateSettingSchemaTest(SocialDBTestCase):

    resources = [('store', DatabaseResource())]

    def testUniqueEntityAndNameConstraint(self):
        """
        An C{IntegrityError} is raised if a L{PrivateSetting} with a duplicate
        name is added to an entity.
        """
        entity = createEntity(EntityType.USER)
        self.store.add(PrivateSetting(entity.guid, 'name', 'value1'))
        self.store.flush()
        self.store.add(PrivateSetting(entity.guid, 'name', 'value2'))
        self.assertRaises(IntegrityError, self.store.flush)
        self.store.rollback()

    def testSameNameOnDifferentEntities(self):
        """Different entities can have settings with the same name."""
        entity1 = createEntity(EntityType.USER)
        entity2 = createEntity(EntityType.USER)
        self.store.add(PrivateSetting(entity1.guid, 'name', 'value1'))
        self.store.add(PrivateSetting(entity2.guid, 'name', 'value2'))
        self.store.flush()
        self.assertEqual(2, self.store.find(PrivateSetting).count())
