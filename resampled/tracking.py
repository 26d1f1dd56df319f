from copy import copy
from threading import Lock

from django.conf import settings

from .utils import get_cache, sanitize_cache_key

_record_lock = Lock()


class GeneratedFileTracker:
    """
    Remembers the names of the derivatives generated for each source, so that
    an invalidation sweep can remove derivatives generated with arguments
    (whose names it couldn't otherwise reconstruct).

    The names are kept in the cache named by ``RESAMPLED_CACHE_BACKEND``; use
    a persistent backend if derivatives should be cleaned up across restarts.

    """

    @property
    def enabled(self):
        return settings.RESAMPLED_TRACK_GENERATED_FILES

    @property
    def cache(self):
        if not getattr(self, '_cache', None):
            self._cache = get_cache()
        return self._cache

    def get_key(self, source):
        return sanitize_cache_key('%s%s-generated' %
                                  (settings.RESAMPLED_CACHE_PREFIX,
                                   source.filename))

    def names(self, source):
        if not self.enabled or not source.filename:
            return []
        return sorted(self.cache.get(self.get_key(source)) or ())

    def record(self, source, name):
        if not self.enabled or not source.filename:
            return
        key = self.get_key(source)
        with _record_lock:
            names = set(self.cache.get(key) or ())
            if name not in names:
                names.add(name)
                self.cache.set(key, names, settings.RESAMPLED_CACHE_TIMEOUT)

    def forget(self, source):
        if source.filename:
            self.cache.delete(self.get_key(source))

    def __getstate__(self):
        state = copy(self.__dict__)
        # Don't include the cache when pickling. It'll be reconstituted based
        # on the settings.
        state.pop('_cache', None)
        return state
