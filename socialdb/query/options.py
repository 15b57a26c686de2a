# An option set to this value places no constraint on the query.
ANY_VALUE = None

# Option values of these types are passed through unchanged.
_UNWRAPPED_TYPES = (list, tuple, dict)


def normalizePluralOptions(options, singulars):
    """Fold singular options into their plural counterparts.

    For each name in C{singulars}, the plural option is the singular name with
    an C{s} suffix.  When a singular option is present its value replaces the
    plural one, wrapped in a C{list} unless it's already a sequence, a
    mapping or L{ANY_VALUE}.  Singular options are always removed.

    @param options: A C{dict} of options.
    @param singulars: A sequence of singular option names.
    @return: A new C{dict} with normalized options.
    """
    options = dict(options)
    for singular in singulars:
        if singular not in options:
            continue
        value = options.pop(singular)
        if value is not ANY_VALUE and not isinstance(value, _UNWRAPPED_TYPES):
            value = [value]
        options[singular + 's'] = value
    return options


def mergeClauses(existing, clauses):
    """Append clauses to an existing C{joins} or C{wheres} option.

    @param existing: The current value of the option, C{None}, a single
        clause or a sequence of clauses.
    @param clauses: A sequence of clauses to append.
    @return: A C{list} with the existing clauses followed by C{clauses}.
    """
    if existing is None:
        existing = []
    elif not isinstance(existing, (list, tuple)):
        existing = [existing]
    return list(existing) + list(clauses)
