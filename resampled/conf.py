from appconf import AppConf
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


class FormatConfig:
    """
    The sizes used by the built-in, argumentless formats. An instance is
    handed to a :class:`resampled.registry.FormatRegistry` when it's created;
    by default it's built from the ``RESAMPLED_THUMBNAIL_SIZES`` setting.

    ========================  ==========  ===========================
    key                       default     format
    ========================  ==========  ===========================
    ``strip_thumbnail``       50 x 50     ``StripThumbnail``
    ``cms_thumbnail``         100 x 100   ``CMSThumbnail``
    ``asset_thumbnail``       100 x 100   ``AssetLibraryThumbnail``
    ``asset_preview``         400 x 200   ``AssetLibraryPreview``
    ========================  ==========  ===========================

    """
    defaults = {
        'strip_thumbnail': (50, 50),
        'cms_thumbnail': (100, 100),
        'asset_thumbnail': (100, 100),
        'asset_preview': (400, 200),
    }

    def __init__(self, **sizes):
        unknown = set(sizes) - set(self.defaults)
        if unknown:
            raise TypeError('Unknown thumbnail sizes: %s'
                            % ', '.join(sorted(unknown)))
        for key, default in self.defaults.items():
            width, height = sizes.get(key, default)
            setattr(self, key, (int(width), int(height)))

    @classmethod
    def from_settings(cls):
        return cls(**settings.RESAMPLED_THUMBNAIL_SIZES)

    def __repr__(self):
        return '<%s: %s>' % (self.__class__.__name__, ', '.join(
            '%s=%sx%s' % ((key,) + getattr(self, key)) for key in self.defaults))


class ResampledConf(AppConf):
    ASSETS_DIR = 'assets'
    CACHE_DIRNAME = '_resampled'

    DEFAULT_FILE_STORAGE = None
    DEFAULT_DERIVATIVE_CACHE = 'resampled.cache.DerivativeCache'
    IMAGE_BACKEND = 'resampled.processors.PILKitBackend'
    PADDING_COLOR = (255, 255, 255, 0)

    GENERATION_TIMEOUT = 30
    GENERATION_WORKERS = 2
    TRACK_GENERATED_FILES = True

    CACHE_BACKEND = None
    CACHE_PREFIX = 'resampled:'
    CACHE_TIMEOUT = None
    USE_MEMCACHED_SAFE_CACHE_KEY = True

    THUMBNAIL_SIZES = dict(FormatConfig.defaults)

    def configure_cache_backend(self, value):
        if value is None:
            from django.core.cache import DEFAULT_CACHE_ALIAS
            return DEFAULT_CACHE_ALIAS

        if value not in settings.CACHES:
            raise ImproperlyConfigured("{0} is not present in settings.CACHES".format(value))

        return value

    def configure_default_file_storage(self, value):
        return value or 'default'

    def configure_thumbnail_sizes(self, value):
        sizes = dict(FormatConfig.defaults)
        sizes.update(value or {})
        return sizes
