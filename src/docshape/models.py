"""Base Pydantic model for docshape.

Every docshape model inherits from `DocshapeBaseModel` so that schema trees,
verdicts and options share one configuration:

- Strict field validation (no extra fields allowed)
- Immutable instances, safe to share between threads

Example:
    >>> from docshape.models import DocshapeBaseModel
    >>>
    >>> class Limits(DocshapeBaseModel):
    ...     depth: int = 8
    >>>
    >>> Limits().model_dump()
    {'depth': 8}
"""

from pydantic import BaseModel, ConfigDict


class DocshapeBaseModel(BaseModel):
    """Base model for all docshape Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable for thread safety
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
