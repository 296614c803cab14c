"""Acquisition failures raised by battery providers."""


class AcquisitionError(Exception):
    """Base class for anything that prevents a battery reading."""


class DeviceNotFound(AcquisitionError):
    """The headset (or its sysfs entry) is not attached right now.

    Expected whenever the dongle is unplugged or the headset sleeps.
    """


class ReadTimeout(AcquisitionError):
    """The device was opened but did not answer within the read timeout."""


class UnexpectedFieldValue(AcquisitionError):
    """A status field holds a value outside its known set."""

    def __init__(self, field: str, value):
        super().__init__(f"Unexpected value for {field}: {value!r}")
        self.field = field
        self.value = value


class IOFailure(AcquisitionError):
    """The underlying read, write or enumeration call failed."""
