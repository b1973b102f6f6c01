"""Domain errors raised by services and translated at the HTTP boundary."""


class CompassError(Exception):
    """Base class for expected, caller-facing failures."""


class InvalidStatusError(CompassError):
    """A status value outside the ContentStatus enumeration."""


class ContentNotFoundError(CompassError):
    """The referenced club/event/category/user does not exist."""


class InvalidJobTransitionError(CompassError):
    """A job status change that the job lifecycle does not allow."""


class ConflictError(CompassError):
    """The write clashes with existing rows (duplicate name, RSVP, links)."""


class RsvpClosedError(CompassError):
    """The event does not accept RSVPs in its current moderation state."""


class PastEventError(CompassError):
    """The event has already started."""
