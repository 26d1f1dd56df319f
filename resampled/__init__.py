from . import conf, invalidation
from .images import DerivativeImage, Folder, Orientation, SourceImage
from .pkgmeta import *
from .registry import register, unregister

__all__ = [
    'DerivativeImage', 'Folder', 'Orientation', 'SourceImage', 'conf',
    'invalidation', 'register', 'unregister',
    '__title__', '__author__', '__version__', '__license__'
]
