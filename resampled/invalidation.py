from django.dispatch import receiver

from .naming import cache_filename
from .registry import format_registry
from .signals import source_changed
from .tracking import GeneratedFileTracker
from .utils import get_logger


class InvalidationSweep:
    """
    Removes the derivatives of a source image. Two sets of names are swept:

    1. The argumentless name of every registered format (the name of e.g.
       ``CMSThumbnail``, but also the argumentless name of ``SetWidth``).
    2. Every name the tracker recorded when generating derivatives for the
       source, which covers derivatives generated with arguments.

    """
    def __init__(self, registry=None, tracker=None):
        self.registry = registry or format_registry
        self.tracker = tracker or GeneratedFileTracker()

    def get_names(self, source):
        names = [cache_filename(source, format)
                 for format, arity in self.registry.list_all()]
        for name in self.tracker.names(source):
            if name not in names:
                names.append(name)
        return names

    def invalidate(self, source):
        """
        Deletes the derivatives of ``source`` and returns the number of files
        removed.

        """
        if not source.filename or getattr(source, 'is_derivative', False):
            return 0

        storage = source.storage
        num_deleted = 0
        for name in self.get_names(source):
            try:
                if storage.exists(name):
                    storage.delete(name)
                    num_deleted += 1
            except OSError as err:
                get_logger().warning('Unable to delete the derivative %s of'
                                     ' %s: %s', name, source.filename, err)
        self.tracker.forget(source)
        if num_deleted:
            get_logger().debug('Removed %s derivatives of %s', num_deleted,
                               source.filename)
        return num_deleted


def flush(sources):
    """
    Invalidates every source in ``sources``. Returns the number of files
    removed and the number of sources that had any.

    """
    num_files = num_sources = 0
    for source in sources:
        num_deleted = source.invalidate()
        if num_deleted:
            num_sources += 1
        num_files += num_deleted
    return num_files, num_sources


@receiver(source_changed)
def invalidate_changed_source(sender, source, **kwargs):
    source.invalidate()
