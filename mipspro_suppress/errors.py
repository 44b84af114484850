EXIT_FAILURE = 1


class WrapperError(Exception):
    """Fatal wrapper condition; the CLI reports it and exits with EXIT_FAILURE."""


class ConfigError(WrapperError):
    pass


class PathTooLong(WrapperError):
    pass


class TargetNotExecutable(WrapperError):
    pass


class LaunchError(WrapperError):
    pass


class FilterError(WrapperError):
    pass


class ReapError(WrapperError):
    pass


class UsageError(WrapperError):
    pass
