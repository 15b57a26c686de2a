"""Entity queries built from option mappings."""

from storm.expr import Desc, SQL

from socialdb.data.entity import Entity, EntityType
from socialdb.data.store import getMainStore
from socialdb.query.exceptions import (
    UnknownEntityTypeError, UnknownOptionError)
from socialdb.query.options import ANY_VALUE, normalizePluralOptions


DEFAULT_LIMIT = 10

DEFAULT_OPTIONS = {
    'guids': ANY_VALUE,
    'types': ANY_VALUE,
    'subtypes': ANY_VALUE,
    'ownerGUIDs': ANY_VALUE,
    'containerGUIDs': ANY_VALUE,
    'wheres': ANY_VALUE,
    'joins': ANY_VALUE,
    'orderBy': ANY_VALUE,
    'limit': DEFAULT_LIMIT,
    'offset': 0,
    'count': False,
    'showHidden': False,
}

SINGULAR_OPTIONS = ['guid', 'type', 'subtype', 'ownerGUID', 'containerGUID']


def getEntityType(value):
    """Get the L{EntityType} for an option value.

    @param value: An L{EntityType} constant or its case-insensitive name.
    @raise UnknownEntityTypeError: Raised if C{value} doesn't name a type.
    @return: An L{EntityType} constant.
    """
    if value in EntityType.getConstants():
        return value
    try:
        return EntityType.fromName(str(value))
    except LookupError:
        raise UnknownEntityTypeError('Unknown entity type %r.' % (value,))


class EntityQuery(object):
    """A query for L{Entity}s.

    Options follow the conventions used throughout SocialDB: plural options
    take sequences, the matching singular option takes a single value, and
    options set to L{ANY_VALUE} place no constraint.

    @param options: Keyword options, any of:
        - C{guids}, C{types}, C{subtypes}, C{ownerGUIDs}, C{containerGUIDs}
          and their singular forms to filter entities with.
        - C{wheres}, a sequence of Storm expressions or raw SQL strings to
          add to the where clause.
        - C{joins}, a sequence of Storm C{Join} expressions.
        - C{orderBy}, a sequence of Storm expressions.  Newest entities come
          first by default.
        - C{limit} and C{offset}.  The default limit is 10, C{0} or C{None}
          disable it.
        - C{count}, C{True} to get the number of matching entities instead
          of the entities themselves.
        - C{showHidden}, C{True} to include disabled entities.
    @raise UnknownOptionError: Raised if unsupported options are given.
    """

    def __init__(self, **options):
        unknown = (set(options) - set(DEFAULT_OPTIONS) -
                   set(SINGULAR_OPTIONS))
        if unknown:
            raise UnknownOptionError(unknown)
        options = dict(DEFAULT_OPTIONS, **options)
        self._options = normalizePluralOptions(options, SINGULAR_OPTIONS)

    def getTables(self):
        """Get the tables to select from.

        @return: A C{list} with L{Entity} followed by the C{joins} option.
        """
        joins = self._options['joins'] or []
        if not isinstance(joins, (list, tuple)):
            joins = [joins]
        return [Entity] + list(joins)

    def getWhereClause(self):
        """Build the where clause for this query.

        @raise UnknownEntityTypeError: Raised if the C{types} option names an
            unknown type.
        @return: A C{list} of Storm expressions.
        """
        options = self._options
        where = []
        if options['guids']:
            where.append(Entity.guid.is_in(options['guids']))
        if options['types']:
            types = [getEntityType(value) for value in options['types']]
            where.append(Entity.type.is_in(types))
        if options['subtypes']:
            where.append(Entity.subtype.is_in(options['subtypes']))
        if options['ownerGUIDs']:
            where.append(Entity.ownerGUID.is_in(options['ownerGUIDs']))
        if options['containerGUIDs']:
            where.append(
                Entity.containerGUID.is_in(options['containerGUIDs']))
        if not options['showHidden']:
            where.append(Entity.enabled == True)

        wheres = options['wheres'] or []
        if not isinstance(wheres, (list, tuple)):
            wheres = [wheres]
        for clause in wheres:
            if isinstance(clause, str):
                clause = SQL(clause)
            where.append(clause)
        return where

    def run(self):
        """Run this query.

        @return: A C{list} of matching L{Entity}s or, if the C{count} option
            is set, the C{int} number of matching entities.
        """
        store = getMainStore()
        result = store.using(*self.getTables()).find(Entity,
                                                     *self.getWhereClause())
        result.config(distinct=True)
        if self._options['count']:
            return result.count()

        orderBy = self._options['orderBy']
        if orderBy is None:
            orderBy = [Desc(Entity.timeCreated), Desc(Entity.guid)]
        elif not isinstance(orderBy, (list, tuple)):
            orderBy = [orderBy]
        result = result.order_by(*orderBy)

        offset = self._options['offset'] or 0
        limit = self._options['limit']
        if limit:
            result = result[offset:offset + limit]
        elif offset:
            result = result[offset:]
        return list(result)
