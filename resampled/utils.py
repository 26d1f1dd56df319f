import logging
import re
from hashlib import md5

from django.conf import settings
from django.core.cache import caches
from django.core.exceptions import ImproperlyConfigured
from django.core.files.storage import InvalidStorageError, storages
from django.utils.module_loading import autodiscover_modules, import_string

bad_memcached_key_chars = re.compile('[\u0000-\u001f\\s]+')
MAX_CACHE_KEY_LENGTH = 200

_autodiscovered = False
_singletons = {}


def get_by_qname(path, desc):
    try:
        return import_string(path)
    except ImportError as e:
        raise ImproperlyConfigured('Unable to load the %s %r: %s'
                                   % (desc, path, e))


def get_singleton(class_path, desc):
    cls = get_by_qname(class_path, desc)
    try:
        return _singletons[cls]
    except KeyError:
        return _singletons.setdefault(cls, cls())


def autodiscover():
    """
    Imports the ``imageformats`` module of every installed app (those that
    have one) so that the formats they register are available.

    """
    global _autodiscovered

    if _autodiscovered:
        return
    # Set the flag first; the imported modules call back into the registry.
    _autodiscovered = True
    autodiscover_modules('imageformats')


def get_logger(logger_name='resampled', add_null_handler=True):
    logger = logging.getLogger(logger_name)
    if add_null_handler and not any(isinstance(h, logging.NullHandler)
                                    for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    return logger


def get_cache():
    return caches[settings.RESAMPLED_CACHE_BACKEND]


def get_storage():
    """
    The storage derivatives are read from and written to by default.
    ``RESAMPLED_DEFAULT_FILE_STORAGE`` is either an alias from ``STORAGES``
    or the dotted path of a storage class.

    """
    name = settings.RESAMPLED_DEFAULT_FILE_STORAGE
    try:
        return storages[name]
    except InvalidStorageError:
        return get_singleton(name, 'file storage backend')


def sanitize_cache_key(key):
    """
    Memcached rejects keys with whitespace or control characters, and keys
    longer than 250 characters. Since we don't know how the cache's
    ``KEY_FUNCTION`` decorates them, long keys are cut short and suffixed
    with a hash of the full key.

    """
    if not settings.RESAMPLED_USE_MEMCACHED_SAFE_CACHE_KEY:
        return key
    safe_key = bad_memcached_key_chars.sub('', key)
    if len(safe_key) < MAX_CACHE_KEY_LENGTH:
        return safe_key
    digest = md5(key.encode('utf-8')).hexdigest()
    return '%s:%s' % (safe_key[:MAX_CACHE_KEY_LENGTH - len(digest) - 1], digest)
