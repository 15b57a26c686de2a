from socialdb.data.entity import (
    Entity, EntityType, createEntity, getEntities)
from socialdb.data.exceptions import MalformedSubtypeError
from socialdb.testing.basic import SocialDBTestCase
from socialdb.testing.resources import DatabaseResource


class CreateEntityTest(SocialDBTestCase):

    resources = [('store', DatabaseResource())]

    def testCreateEntity(self):
        """L{createEntity} creates a new L{Entity}."""
        entity = createEntity(EntityType.OBJECT, 'blog', ownerGUID=7,
                              timeCreated=1234)
        self.assertEqual(EntityType.OBJECT, entity.type)
        self.assertEqual('blog', entity.subtype)
        self.assertEqual(7, entity.ownerGUID)
        self.assertEqual(1234, entity.timeCreated)
        self.assertTrue(entity.enabled)

    def testCreateEntityAssignsGUID(self):
        """L{createEntity} assigns a unique GUID to each new L{Entity}."""
        entity1 = createEntity(EntityType.USER)
        entity2 = createEntity(EntityType.USER)
        self.assertNotEqual(None, entity1.guid)
        self.assertNotEqual(entity1.guid, entity2.guid)

    def testCreateEntityUsesOwnerAsContainer(self):
        """
        L{createEntity} uses the owner GUID as the container GUID if one isn't
        explicitly provided.
        """
        entity = createEntity(EntityType.OBJECT, ownerGUID=42)
        self.assertEqual(42, entity.containerGUID)

    def testCreateEntityWithContainer(self):
        """L{createEntity} stores an explicit container GUID."""
        entity = createEntity(EntityType.OBJECT, ownerGUID=42,
                              containerGUID=17)
        self.assertEqual(17, entity.containerGUID)

    def testCreateEntityWithoutTimeCreated(self):
        """L{createEntity} uses the current time as the creation time."""
        entity = createEntity(EntityType.SITE)
        self.assertTrue(entity.timeCreated > 0)

    def testCreateEntityWithEmptySubtype(self):
        """
        L{createEntity} raises L{MalformedSubtypeError} if an empty subtype
        is provided.
        """
        self.assertRaises(MalformedSubtypeError, createEntity,
                          EntityType.OBJECT, '')

    def testCreateEntityWithLongSubtype(self):
        """
        L{createEntity} raises L{MalformedSubtypeError} if the subtype is
        longer than 50 characters.
        """
        self.assertRaises(MalformedSubtypeError, createEntity,
                          EntityType.OBJECT, 'x' * 51)

    def testCreateEntityAddsToStore(self):
        """L{createEntity} adds the new L{Entity} to the main store."""
        entity = createEntity(EntityType.GROUP)
        result = self.store.find(Entity, Entity.guid == entity.guid)
        self.assertIdentical(entity, result.one())


class GetEntitiesTest(SocialDBTestCase):

    resources = [('store', DatabaseResource())]

    def testGetEntities(self):
        """
        L{getEntities} returns all L{Entity}s in the database, by default.
        """
        entity1 = createEntity(EntityType.USER)
        entity2 = createEntity(EntityType.OBJECT)
        self.assertEqual(sorted([entity1.guid, entity2.guid]),
                         sorted(entity.guid for entity in getEntities()))

    def testGetEntitiesWithGUIDs(self):
        """
        When L{Entity.guid}s are provided L{getEntities} returns matching
        L{Entity}s.
        """
        entity = createEntity(EntityType.USER)
        createEntity(EntityType.USER)
        result = getEntities(guids=[entity.guid])
        self.assertIdentical(entity, result.one())

    def testGetEntitiesWithTypes(self):
        """
        When L{EntityType}s are provided L{getEntities} returns matching
        L{Entity}s.
        """
        createEntity(EntityType.USER)
        group = createEntity(EntityType.GROUP)
        result = getEntities(types=[EntityType.GROUP])
        self.assertIdentical(group, result.one())

    def testGetEntitiesWithSubtypes(self):
        """
        When subtypes are provided L{getEntities} returns matching
        L{Entity}s.
        """
        blog = createEntity(EntityType.OBJECT, 'blog')
        createEntity(EntityType.OBJECT, 'file')
        result = getEntities(subtypes=['blog'])
        self.assertIdentical(blog, result.one())

    def testGetEntitiesWithOwnerGUIDs(self):
        """
        When owner GUIDs are provided L{getEntities} returns the L{Entity}s
        they own.
        """
        user = createEntity(EntityType.USER)
        entity = createEntity(EntityType.OBJECT, ownerGUID=user.guid)
        createEntity(EntityType.OBJECT)
        result = getEntities(ownerGUIDs=[user.guid])
        self.assertIdentical(entity, result.one())

    def testGetEntitiesWithContainerGUIDs(self):
        """
        When container GUIDs are provided L{getEntities} returns the
        L{Entity}s they contain.
        """
        group = createEntity(EntityType.GROUP)
        entity = createEntity(EntityType.OBJECT, containerGUID=group.guid)
        createEntity(EntityType.OBJECT)
        result = getEntities(containerGUIDs=[group.guid])
        self.assertIdentical(entity, result.one())
