"""
Layer contains data access logic for storing and retrieving data in SocialDB.
"""

# Import all the data classes so that they get registered with Storm's
# property resolver.
from socialdb.data.entity import Entity
from socialdb.data.setting import PrivateSetting


# Suppress Pyflakes warnings.
_ = (Entity, PrivateSetting)

# Remove them so that they can't be imported directly from this package.
del (Entity, PrivateSetting, _)
