"""SocialDB is the entity storage layer of a social networking platform.

Users, groups and content objects are all entities, identified by a numeric
GUID.  Plugins and users attach configuration to entities in the form of
private settings, opaque name/value strings that are never exported, and
entities can be looked up by the private settings they carry.  The main logic
for SocialDB is in several packages that form a stack of layers, each with a
distinct function:

 - L{socialdb.data} is at the bottom of the stack and contains low-level data
   access logic for validating and managing data in the database.

 - L{socialdb.query} turns the loosely-typed option mappings used to look up
   entities into Storm expressions.  The private settings clause builder
   lives here.

 - L{socialdb.model} uses the functionality provided by the data and query
   layers to provide access to data in the system.  It contains the business
   logic for SocialDB and exposes it in the form of L{EntityAPI} and
   L{PrivateSettingAPI} classes.

 - L{socialdb.cache} caches the results produced by the model layer.  For all
   intents and purposes, this layer provides the same APIs as the model
   layer, and should be indistinguishable (other than it should provide a
   nice performance boost).

The L{socialdb.application} module contains the startup logic used to
configure logging, the database and the cache.  Several other packages
provide supporting functionality:

 - L{socialdb.schema} contains the SQL statements and database patches needed
   to create the schema in the database.

 - L{socialdb.scripts} contains operational tools to manage the database
   schema.

 - L{socialdb.testing} provides testing tools in the form of test resources
   that can be used to easily prepare the database, the cache, capture
   logging, etc. and in the form of test doubles that can be used in place
   of real implementations to make testing easier or more complete.

 - L{socialdb.util} provides functionality that isn't particularly
   SocialDB-specific, but is needed nonetheless.
"""
