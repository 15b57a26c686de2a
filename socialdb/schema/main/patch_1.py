"""
Add indexes on private setting names and values, used when looking up
entities by their private settings.
"""

import logging


def apply(store):
    logging.info(__doc__.strip())
    store.execute('CREATE INDEX private_settings_name_idx '
                  'ON private_settings (name)')
    store.execute('CREATE INDEX private_settings_value_idx '
                  'ON private_settings (value)')
