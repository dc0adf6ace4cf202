"""
Exceptions raised by the countdown request pipeline.
"""


class CountdownError(Exception):
    """Base exception for all pipeline errors."""

    public_message = "Internal server error"


class DataUnavailable(CountdownError):
    """Events file is missing or cannot be read."""

    public_message = "Could not load events"


class DataMalformed(CountdownError):
    """Events file could not be decoded."""

    public_message = "Could not load events"


class TemplateUnavailable(CountdownError):
    """Page template is missing or cannot be parsed."""

    public_message = "Could not render page"


class RenderFailure(CountdownError):
    """Template failed while rendering."""

    public_message = "Could not render page"
