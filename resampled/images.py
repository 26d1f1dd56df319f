import posixpath

from django.conf import settings
from django.core.files.images import get_image_dimensions
from django.utils.encoding import smart_str
from django.utils.html import format_html

from .utils import get_singleton, get_storage


class Orientation:
    SQUARE = 'square'
    PORTRAIT = 'portrait'
    LANDSCAPE = 'landscape'


class Folder:
    """
    The folder a source image lives in. Only its ``filename`` (the storage
    path of the folder, e.g. ``"assets/photos/"``) is used; any object with
    that attribute can stand in for it.

    """
    def __init__(self, filename):
        self.filename = filename

    def __repr__(self):
        return '<%s: %s>' % (self.__class__.__name__, self.filename)


class BaseImage:
    """
    The behavior shared by source images and their derivatives. It's only
    extended by two classes, but we keep it separate for organizational
    reasons.

    """
    is_derivative = False
    id = None
    parent = None
    title = None

    def __init__(self, filename=None, storage=None, derivative_cache=None):
        self.filename = filename
        self._storage = storage
        self._derivative_cache = derivative_cache

    @property
    def storage(self):
        if self._storage is None:
            self._storage = get_storage()
        return self._storage

    @property
    def derivative_cache(self):
        if self._derivative_cache is None:
            self._derivative_cache = get_singleton(
                settings.RESAMPLED_DEFAULT_DERIVATIVE_CACHE, 'derivative cache')
        return self._derivative_cache

    @property
    def root(self):
        return self

    @property
    def name(self):
        return posixpath.basename(self.filename or '')

    def exists(self):
        return bool(self.filename) and self.storage.exists(self.filename)

    def __bool__(self):
        return self.exists()

    @property
    def url(self):
        if not self.filename:
            return None
        return self.storage.url(self.filename)

    def tag(self):
        """
        An ``<img>`` tag for the image, or an empty string if the file is
        missing.

        """
        if not self.exists():
            return ''
        return format_html('<img src="{}" alt="{}" />', self.url,
                           self.title or self.filename)

    def __html__(self):
        return self.tag()

    def get_dimensions(self, dim='string'):
        """
        Get the dimensions of the image. If ``dim`` is ``"string"``, return
        them in the form ``"200x100"``; if it's ``0`` return the width and if
        it's ``1`` the height.

        """
        if not self.filename:
            return None
        if not self.exists():
            return "file '%s' not found" % self.filename if dim == 'string' else None
        with self.storage.open(self.filename, 'rb') as file:
            size = get_image_dimensions(file)
        return '%sx%s' % size if dim == 'string' else size[dim]

    @property
    def width(self):
        return self.get_dimensions(0)

    @property
    def height(self):
        return self.get_dimensions(1)

    @property
    def orientation(self):
        width, height = self.width, self.height
        if width is None or height is None:
            return None
        if width > height:
            return Orientation.LANDSCAPE
        elif height > width:
            return Orientation.PORTRAIT
        return Orientation.SQUARE

    def get_formatted(self, format, arg1=None, arg2=None, force=False):
        """
        Return the derivative of this image in the given format, generating
        it if needed. See :meth:`resampled.cache.DerivativeCache.get_formatted`.

        """
        return self.derivative_cache.get_formatted(self, format, arg1, arg2,
                                                   force=force)

    def set_width(self, width):
        return self.get_formatted('SetWidth', width)

    def set_height(self, height):
        return self.get_formatted('SetHeight', height)

    def set_size(self, width, height):
        return self.get_formatted('SetSize', width, height)

    def cropped_image(self, width, height):
        return self.get_formatted('CroppedImage', width, height)

    def cms_thumbnail(self):
        return self.get_formatted('CMSThumbnail')

    def invalidate(self):
        raise NotImplementedError

    def __str__(self):
        return smart_str(self.filename or '')

    def __repr__(self):
        return smart_str('<%s: %s>' % (self.__class__.__name__,
                                       self.filename or 'None'))


class SourceImage(BaseImage):
    """
    An original image. It's usable once it has an ``id`` and a ``filename``
    that exists in its storage.

    Whoever replaces the bytes stored under ``filename`` must call
    :meth:`invalidate` (or send :data:`resampled.signals.source_changed`) so
    that stale derivatives are removed.

    """
    def __init__(self, filename=None, id=None, parent=None, title=None,
                 storage=None, derivative_cache=None):
        super().__init__(filename, storage=storage,
                         derivative_cache=derivative_cache)
        self.id = id
        self.parent = parent
        self.title = title

    def invalidate(self):
        """
        Remove the derivatives of this image. Returns the number of files
        removed.

        """
        return self.derivative_cache.invalidate(self)


class DerivativeImage(BaseImage):
    """
    A generated variant of an image. It can be formatted further (its own
    derivatives are stored beside it), but it has no identity of its own:
    invalidating it does nothing. Its derivatives are removed when its
    :attr:`root` source is invalidated.

    """
    is_derivative = True

    def __init__(self, filename, storage=None, origin=None,
                 derivative_cache=None):
        super().__init__(filename, storage=storage,
                         derivative_cache=derivative_cache)
        self.origin = origin

    @property
    def root(self):
        """
        The source image this derivative was ultimately generated from.

        """
        if self.origin is None:
            return self
        return getattr(self.origin, 'root', self.origin)

    def invalidate(self):
        return 0
