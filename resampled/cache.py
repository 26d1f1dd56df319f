from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from threading import Lock
from weakref import WeakValueDictionary

from django.conf import settings

from .exceptions import (GenerationTimeout, InvalidArguments,
                         ProcessorUnavailable, SourceUnusable, UnknownFormat,
                         WriteFailure)
from .images import DerivativeImage
from .invalidation import InvalidationSweep
from .naming import cache_filename
from .registry import format_registry
from .signals import derivative_generated
from .tracking import GeneratedFileTracker
from .utils import get_logger, get_singleton

_default = object()


def get_default_derivative_cache():
    """
    Get the default derivative cache.

    """
    return get_singleton(settings.RESAMPLED_DEFAULT_DERIVATIVE_CACHE,
                         'derivative cache')


class NameLock:
    def __init__(self):
        self._lock = Lock()

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info):
        self._lock.release()


class DerivativeCache:
    """
    Hands out derivatives of source images, generating them the first time
    they're asked for and reusing the stored file afterwards.

    Generation of a given name is serialized: when several threads miss the
    same name at once, one of them generates the file and the others find it
    once they get the lock. Processing is abandoned after ``timeout`` seconds
    (``RESAMPLED_GENERATION_TIMEOUT``); a timeout of ``None`` runs it inline in
    the calling thread.

    """

    def __init__(self, registry=None, backend=None, tracker=None,
                 timeout=_default):
        self.registry = registry or format_registry
        self.backend = backend or get_singleton(
            settings.RESAMPLED_IMAGE_BACKEND, 'image backend')
        self.tracker = tracker or GeneratedFileTracker()
        if timeout is _default:
            timeout = settings.RESAMPLED_GENERATION_TIMEOUT
        self.timeout = timeout
        self.sweep = InvalidationSweep(self.registry, self.tracker)
        self._locks = WeakValueDictionary()
        self._locks_lock = Lock()
        self._executor = None

    @property
    def executor(self):
        if self._executor is None:
            with self._locks_lock:
                if self._executor is None:
                    self._executor = ThreadPoolExecutor(
                        max_workers=settings.RESAMPLED_GENERATION_WORKERS,
                        thread_name_prefix='resampled')
        return self._executor

    def get_lock(self, name):
        with self._locks_lock:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = NameLock()
            return lock

    def is_usable(self, source):
        if not source.filename:
            return False
        if not getattr(source, 'is_derivative', False) and source.id is None:
            return False
        return source.storage.exists(source.filename)

    def get_formatted(self, source, format, arg1=None, arg2=None, force=False):
        """
        Returns the derivative of ``source`` in ``format``, generating it if
        it doesn't exist yet or if ``force`` is ``True``.

        Returns ``None`` when there is nothing to render: the source isn't
        usable, the format isn't registered, or the image couldn't be
        processed. When the transformation produced nothing or the file
        couldn't be written, the returned derivative is falsy.

        """
        if not self.is_usable(source):
            get_logger().debug('%r is not usable; not generating %s',
                               source, format)
            return None

        name = cache_filename(source, format, arg1, arg2)
        if force or not source.storage.exists(name):
            try:
                self.generate(source, format, arg1, arg2, force=force)
            except (SourceUnusable, UnknownFormat, ProcessorUnavailable,
                    GenerationTimeout) as err:
                get_logger().warning('Unable to generate %s: %s', name, err)
                return None
            except InvalidArguments as err:
                get_logger().info('The %s format declined %r: %s', format,
                                  source, err)
            except WriteFailure as err:
                get_logger().warning(str(err))

        return DerivativeImage(name, storage=source.storage, origin=source,
                               derivative_cache=self)

    def generate(self, source, format, arg1=None, arg2=None, force=False):
        """
        Generates the derivative and returns its name, or ``None`` if the
        transformation produced no image. Unless ``force`` is ``True``, an
        existing file is left alone.

        """
        name = cache_filename(source, format, arg1, arg2)
        with self.get_lock(name):
            # Another thread may have generated the file while we waited.
            if not force and source.storage.exists(name):
                return name

            definition = self.registry.resolve(format)
            processed = self.run(self.process, source, definition, arg1, arg2)
            if processed is None:
                get_logger().info('The %s format produced no image for %r',
                                  format, source)
                return None
            self.write(source, processed, name)

        derivative_generated.send(sender=self.__class__, source=source,
                                  name=name, format=format,
                                  args=(arg1, arg2))
        return name

    def process(self, source, definition, arg1, arg2):
        try:
            with source.storage.open(source.filename, 'rb') as file:
                image = self.backend.open(file)
        except OSError as err:
            raise SourceUnusable('Unable to read %s: %s' % (source.filename, err))
        if image is None:
            raise ProcessorUnavailable('%s is unable to process %s' %
                                       (self.backend, source.filename))
        return definition(image, arg1, arg2)

    def run(self, fn, *args):
        if not self.timeout:
            return fn(*args)
        future = self.executor.submit(fn, *args)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError:
            future.cancel()
            raise GenerationTimeout('Processing took longer than %s seconds'
                                    % self.timeout)

    def write(self, source, processed, name):
        storage = source.storage
        try:
            # Storages pick a new name rather than overwrite.
            if storage.exists(name):
                storage.delete(name)
            actual_name = processed.write_to(storage, name)
        except OSError as err:
            raise WriteFailure('Unable to write the derivative %s: %s'
                               % (name, err))

        if actual_name != name:
            raise WriteFailure(
                'The storage backend %s did not save the file with the'
                ' requested name ("%s") and instead used "%s". This may be'
                ' because another process wrote the file at the same time.'
                ' The saved file will not be used.' % (storage, name,
                                                       actual_name))
        # Nested derivatives are swept along with the source they came from.
        self.tracker.record(getattr(source, 'root', source), name)

    def invalidate(self, source):
        return self.sweep.invalidate(source)

    def __getstate__(self):
        state = dict(self.__dict__)
        for attr in ('_locks', '_locks_lock', '_executor'):
            state.pop(attr, None)
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._locks = WeakValueDictionary()
        self._locks_lock = Lock()
        self._executor = None
