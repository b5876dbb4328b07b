"""Exception hierarchy shared by the pipeline, the catalog and the web tier."""


class RunwayError(Exception):
    """Base class for all Infinite Runway errors."""


class ConfigurationError(RunwayError):
    """Required settings are missing or unusable."""


class SourceFetchError(RunwayError):
    """A single source could not be fetched or parsed."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source


class GenerationError(RunwayError):
    """The hosted model failed or returned nothing usable."""


class EmptyGenerationRequestError(GenerationError):
    """A generation request carried no scraped content."""


class DuplicateSlugError(RunwayError):
    """Two publication records share a slug."""

    def __init__(self, slug: str):
        super().__init__(f"Duplicate publication slug: {slug}")
        self.slug = slug
