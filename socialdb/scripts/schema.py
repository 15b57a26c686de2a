from storm.schema.patch import PatchApplier
import transaction


def patchDatabase(store, schema):
    """Create a schema or apply databases patches to a database.

    @param store: The C{Store} for the database.
    @param schema: The Storm C{Schema} for the database.
    """
    try:
        schema.upgrade(store)
    except Exception:
        transaction.abort()
        raise
    else:
        transaction.commit()


class PatchStatus(object):
    """Information about the patch state of a database.

    @ivar unappliedPatches: A list of unapplied patch versions.
    @ivar unknownPatches: A list of unknown patch versions.
    """

    def __init__(self, unappliedPatches, unknownPatches):
        self.unappliedPatches = unappliedPatches
        self.unknownPatches = unknownPatches


def getPatchStatus(store, patchPackage):
    """Get the patch status for a database.

    @param store: The C{Store} for the database.
    @param patchPackage: The Python package with the database patches, such
        as L{socialdb.schema.main}.
    @return: A L{PatchStatus} instance with information about the patch level
        of the database.
    """
    patchApplier = PatchApplier(store, patchPackage)
    unappliedPatches = sorted(patchApplier.get_unapplied_versions())
    unknownPatches = sorted(patchApplier.get_unknown_patch_versions())
    return PatchStatus(unappliedPatches, unknownPatches)
