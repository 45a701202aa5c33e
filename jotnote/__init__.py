"""jotnote
Terminal-based personal notes with local JSON storage.

License: MIT
"""
APP_NAME = "jotnote"
APP_VERS = "0.1.0"
APP_COPYRIGHT = "Copyright © 2026 the jotnote authors."
APP_LICENSE = "Released under MIT license."

__version__ = APP_VERS
