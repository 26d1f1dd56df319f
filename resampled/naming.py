"""
Functions responsible for returning storage names for derivatives. Given a
source image stored at::

    assets/photos/bulldog.jpg

whose parent folder is ``assets/photos/``, the ``SetWidth`` format with the
argument ``100`` is cached at::

    assets/photos/_resampled/SetWidth100-bulldog.jpg

A source without a parent folder puts its derivatives under
``RESAMPLED_ASSETS_DIR``. A derivative already lives in a cache directory, so
its own derivatives are stored beside it::

    assets/photos/_resampled/SetHeight20-SetWidth100-bulldog.jpg

The arguments are concatenated without a separator and ``None`` counts as the
empty string, so ``('SetWidth', 100, None)`` and ``('SetWidth', 100, '')``
share a name. Existing caches depend on this layout.

"""
import posixpath

from django.conf import settings
from django.utils.encoding import force_str


def source_folder(source):
    parent = getattr(source, 'parent', None)
    folder = getattr(parent, 'filename', None) if parent is not None else None
    if not folder:
        folder = settings.RESAMPLED_ASSETS_DIR
    return force_str(folder).rstrip('/')


def cache_dir(source):
    if getattr(source, 'is_derivative', False):
        return posixpath.dirname(source.filename)
    return posixpath.join(source_folder(source),
                          settings.RESAMPLED_CACHE_DIRNAME)


def format_argument(arg):
    return '' if arg is None else force_str(arg)


def cache_filename(source, format, arg1=None, arg2=None):
    """
    The storage name of the derivative of ``source`` in ``format`` with the
    given arguments. Performs no I/O.

    """
    key = '%s%s%s' % (format, format_argument(arg1), format_argument(arg2))
    return posixpath.join(cache_dir(source), '%s-%s' % (key, source.name))
