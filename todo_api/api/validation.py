"""Request body validation for Flask endpoints.

The @validate_request decorator looks for a view parameter annotated with a
Pydantic model, parses the JSON request body into it and passes the model
instance as that argument. Path parameters are passed through unchanged.

    @todos_bp.patch("/<todo_id>")
    @validate_request
    def update_todo(todo_id: str, data: TodoUpdate):
        ...
"""

import inspect
from functools import wraps
from typing import get_type_hints

from flask import request
from pydantic import BaseModel, ValidationError

from ..exceptions import ValidationError as ApiValidationError


def _find_model_param(f) -> tuple[str, type[BaseModel]] | None:
    hints = get_type_hints(f)
    for name in inspect.signature(f).parameters:
        hint = hints.get(name)
        if inspect.isclass(hint) and issubclass(hint, BaseModel):
            return name, hint
    return None


def validate_request(f):
    """
    Decorator that validates the JSON body against the view's Pydantic model.

    Raises:
        ValidationError: If the body is missing, not a JSON object, or fails
            model validation. Details list the failing fields without
            echoing submitted values.
    """
    model_param = _find_model_param(f)

    @wraps(f)
    def wrapper(*args, **kwargs):
        if model_param is None:
            return f(*args, **kwargs)

        name, model = model_param
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ApiValidationError(
                "Request body must be a JSON object",
                {"expected": "application/json object"}
            )

        try:
            kwargs[name] = model.model_validate(body)
        except ValidationError as e:
            raise ApiValidationError(
                "Invalid request data",
                {"errors": e.errors(include_url=False, include_context=False, include_input=False)}
            )

        return f(*args, **kwargs)

    return wrapper
