import inspect
from threading import RLock

from .conf import FormatConfig
from .exceptions import UnknownFormat
from .formats import register_default_formats
from .utils import autodiscover

MAX_ARITY = 2


def infer_arity(fn):
    """
    The number of positional parameters ``fn`` takes after the image.

    """
    positional = (inspect.Parameter.POSITIONAL_ONLY,
                  inspect.Parameter.POSITIONAL_OR_KEYWORD)
    params = [p for p in inspect.signature(fn).parameters.values()
              if p.kind in positional]
    return max(len(params) - 1, 0)


class FormatDefinition:
    """
    A named transformation. Calling the definition passes the image and
    exactly ``arity`` arguments to the transformation; missing arguments are
    ``None`` and surplus ones are dropped.

    """
    def __init__(self, name, arity, fn):
        if not callable(fn):
            raise TypeError('The transformation for format %s is not'
                            ' callable.' % name)
        if not 0 <= arity <= MAX_ARITY:
            raise ValueError('Format %s takes %s arguments; formats take'
                             ' between 0 and %s.' % (name, arity, MAX_ARITY))
        self.name = name
        self.arity = arity
        self.fn = fn

    def __call__(self, image, *args):
        args = (list(args) + [None] * self.arity)[:self.arity]
        return self.fn(image, *args)

    def __eq__(self, other):
        return (isinstance(other, FormatDefinition)
                and (self.name, self.arity, self.fn)
                == (other.name, other.arity, other.fn))

    def __hash__(self):
        return hash((self.name, self.arity, self.fn))

    def __repr__(self):
        return '<%s: %s/%s>' % (self.__class__.__name__, self.name, self.arity)


class FormatRegistry:
    """
    An object for registering formats. A format registered with the name of
    an existing one replaces it, so a project can override the formats an app
    (or this library) ships with simply by registering its own.

    """
    def __init__(self, config=None, defaults=True, discover=False):
        self.config = config or FormatConfig.from_settings()
        self._formats = {}
        self._lock = RLock()
        self._discover = discover
        if defaults:
            register_default_formats(self)

    def register(self, name, arity, fn):
        definition = FormatDefinition(name, arity, fn)
        with self._lock:
            self._formats[name] = definition
        return definition

    def unregister(self, name):
        with self._lock:
            try:
                del self._formats[name]
            except KeyError:
                raise UnknownFormat('The format %s is not registered' % name)

    def resolve(self, name):
        self._autodiscover()
        with self._lock:
            try:
                return self._formats[name]
            except KeyError:
                raise UnknownFormat('The format %s is not registered' % name)

    def list_all(self):
        self._autodiscover()
        with self._lock:
            return [(d.name, d.arity) for d in self._formats.values()]

    def get_names(self):
        return [name for name, arity in self.list_all()]

    def __contains__(self, name):
        self._autodiscover()
        with self._lock:
            return name in self._formats

    def _autodiscover(self):
        if self._discover:
            autodiscover()


class SourceRegistry:
    """
    Keeps track of the callables that enumerate source images, so that
    management commands can act on every image a project knows about. Each
    provider is called without arguments and returns an iterable of source
    images.

    """
    def __init__(self):
        self._providers = []

    def register(self, provider):
        if provider not in self._providers:
            self._providers.append(provider)

    def unregister(self, provider):
        try:
            self._providers.remove(provider)
        except ValueError:
            pass

    def get(self):
        autodiscover()
        for provider in list(self._providers):
            yield from provider()


class Register:
    """
    Register formats and source providers.

    """
    def format(self, name, fn=None, arity=None):
        if fn is None:
            # Return a decorator
            def decorator(fn):
                self.format(name, fn, arity=arity)
                return fn
            return decorator

        if arity is None:
            arity = infer_arity(fn)
        format_registry.register(name, arity, fn)

    def sources(self, provider):
        source_registry.register(provider)
        return provider


class Unregister:
    """
    Unregister formats and source providers.

    """
    def format(self, name):
        format_registry.unregister(name)

    def sources(self, provider):
        source_registry.unregister(provider)


format_registry = FormatRegistry(discover=True)
source_registry = SourceRegistry()
register = Register()
unregister = Unregister()
