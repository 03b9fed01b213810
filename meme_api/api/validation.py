"""Request body validation decorator.

@validate_request looks for a view parameter annotated with a pydantic model,
validates the JSON body against it and passes the model instance in. Path
parameters are passed through unchanged.

    @memes_bp.post("")
    @validate_request
    def create_meme(data: MemeCreate):
        ...
"""

import inspect
import logging
from functools import wraps
from typing import get_type_hints

from flask import request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


def _find_model_param(f) -> tuple[str, type[BaseModel]] | None:
    hints = get_type_hints(f)
    for name in inspect.signature(f).parameters:
        hint = hints.get(name)
        if inspect.isclass(hint) and issubclass(hint, BaseModel):
            return name, hint
    return None


def _format_errors(exc: PydanticValidationError) -> list[dict]:
    """Flatten pydantic errors into field/message/expected_type entries."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in exc.errors(include_url=False)
    ]


def _first_message(exc: PydanticValidationError) -> str:
    """Message for the response body.

    Custom ValueError messages from model validators are used verbatim.
    """
    err = exc.errors(include_url=False)[0]
    if err["type"] == "value_error":
        return str(err["ctx"]["error"])
    field = ".".join(str(part) for part in err["loc"])
    return f"{field}: {err['msg']}" if field else err["msg"]


def validate_request(f):
    """Validate the JSON request body against the view's pydantic model.

    A missing or unparseable body is validated as an empty object.

    Raises:
        ValidationError: If the body does not satisfy the model
    """
    model_param = _find_model_param(f)

    @wraps(f)
    def wrapper(*args, **kwargs):
        if model_param is not None:
            name, model = model_param
            body = request.get_json(silent=True)
            if body is None:
                body = {}

            try:
                kwargs[name] = model.model_validate(body)
            except PydanticValidationError as e:
                details = {
                    "model": model.__name__,
                    "received": sorted(body) if isinstance(body, dict) else type(body).__name__,
                    "errors": _format_errors(e),
                }
                logger.info(f"Request validation failed for {model.__name__}: {details['errors']}")
                raise ValidationError(_first_message(e), details)

        return f(*args, **kwargs)

    return wrapper
