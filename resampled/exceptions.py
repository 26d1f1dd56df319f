class ResampledError(Exception):
    pass


class SourceUnusable(ResampledError):
    """
    The source image has no identity, no filename or no bytes on storage.

    """
    silent_variable_failure = True


class UnknownFormat(ResampledError, LookupError):
    pass


class ProcessorUnavailable(ResampledError):
    pass


class InvalidArguments(ResampledError, ValueError):
    pass


class WriteFailure(ResampledError):
    pass


class GenerationTimeout(ResampledError):
    pass
