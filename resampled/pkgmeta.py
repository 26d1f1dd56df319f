__title__ = 'django-resampled'
__author__ = 'Matthew Tretter, Venelin Stoykov'
__version__ = '0.1.0'
__license__ = 'BSD'
__all__ = ['__title__', '__author__', '__version__', '__license__']
