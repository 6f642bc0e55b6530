"""Exception hierarchy for swaptop."""


class SwaptopError(Exception):
    """Base class for all swaptop errors."""


class AcquisitionError(SwaptopError):
    """The swap data source could not produce a reading."""


class ConfigError(SwaptopError):
    """An environment setting has an invalid value."""
