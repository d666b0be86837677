import logging

__version__ = '0.1'

logging.getLogger(__name__).addHandler(logging.NullHandler())
