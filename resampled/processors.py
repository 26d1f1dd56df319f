"""
The bridge between the derivative cache and the imaging library. The cache
only ever talks to a backend (``RESAMPLED_IMAGE_BACKEND``) and to the
:class:`ProcessedImage` values it hands out; the pixel work itself is done by
pilkit's processors.

"""
from io import BytesIO
import os

from django.conf import settings
from django.core.files.base import ContentFile
from PIL import Image
from pilkit.exceptions import UnknownExtension
from pilkit.processors import Resize, ResizeToFill, ResizeToFit
from pilkit.utils import extension_to_format, open_image, save_image

from .exceptions import InvalidArguments
from .utils import get_logger


def dimension(value, desc):
    """
    Coerce a format argument (which may have come from a template, and so may
    be a string) into a positive pixel count.

    """
    if value is None or isinstance(value, bool):
        raise InvalidArguments('A %s is required.' % desc)
    try:
        value = int(float(value))
    except (TypeError, ValueError):
        raise InvalidArguments('%r is not a valid %s.' % (value, desc))
    if value < 1:
        raise InvalidArguments('The %s must be positive, got %s.' % (desc, value))
    return value


class ProcessedImage:
    """
    An opened image. Every operation returns a new ``ProcessedImage``; the
    receiver is never modified.

    """
    def __init__(self, image, format=None, padding_color=None):
        self.image = image
        self.format = format or getattr(image, 'format', None)
        self.padding_color = padding_color

    @property
    def width(self):
        return self.image.size[0]

    @property
    def height(self):
        return self.image.size[1]

    def process(self, processor):
        return self.__class__(processor.process(self.image),
                              format=self.format,
                              padding_color=self.padding_color)

    def resize_by_width(self, width):
        return self.process(ResizeToFit(width=dimension(width, 'width')))

    def resize_by_height(self, height):
        return self.process(ResizeToFit(height=dimension(height, 'height')))

    def resize(self, width, height):
        return self.process(Resize(dimension(width, 'width'),
                                   dimension(height, 'height')))

    def padded_resize(self, width, height):
        return self.process(ResizeToFit(dimension(width, 'width'),
                                        dimension(height, 'height'),
                                        mat_color=self.padding_color))

    def cropped_resize(self, width, height):
        return self.process(ResizeToFill(dimension(width, 'width'),
                                         dimension(height, 'height')))

    def get_format(self, filename=None):
        ext = os.path.splitext(filename or '')[1]
        if ext:
            try:
                return extension_to_format(ext)
            except UnknownExtension:
                pass
        return self.format or 'JPEG'

    def save(self, format=None, options=None):
        return save_image(self.image, BytesIO(), format or self.get_format(),
                          options=options)

    def write_to(self, storage, name, options=None):
        """
        Saves the image to ``storage`` under ``name``, in the format implied
        by the name's extension, and returns the name the storage used.

        """
        content = self.save(self.get_format(name), options=options)
        return storage.save(name, ContentFile(content.getvalue()))

    def __repr__(self):
        return '<%s: %sx%s %s>' % (self.__class__.__name__, self.width,
                                   self.height, self.format)


class PILKitBackend:
    """
    Opens source files with PIL. Files PIL can't decode (an unsupported
    format, a codec missing from this PIL build, or an image larger than
    ``Image.MAX_IMAGE_PIXELS`` allows) make ``open`` return ``None``.

    """
    def __init__(self, padding_color=None):
        if padding_color is None:
            padding_color = settings.RESAMPLED_PADDING_COLOR
        self.padding_color = tuple(padding_color) if padding_color else None

    def open(self, file):
        try:
            img = open_image(file)
            # Decode now; a missing codec only shows up when pixels are read.
            img.load()
        except (OSError, SyntaxError, ValueError,
                Image.DecompressionBombError) as err:
            get_logger().warning('Unable to open %s for processing: %s',
                                 getattr(file, 'name', file), err)
            return None
        return ProcessedImage(img, padding_color=self.padding_color)
