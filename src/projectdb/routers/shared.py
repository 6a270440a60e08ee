from typing import Any, Mapping, Union

ROUTER_BASE_PREFIX = "/api/v1"

BASE_RESPONSES: Mapping[int, dict[str, Any]] = {
    400: {"description": "Bad request. Check parameters and payload."},
    401: {"description": "Authentication required."},
    403: {"description": "Forbidden. Insufficient permissions."},
    404: {"description": "Resource not found."},
    409: {"description": "Conflict with current resource state."},
    422: {"description": "Unprocessable entity. Validation failed."},
    500: {"description": "Internal server error."},
}

BASE_400_RESPONSE: Mapping[Union[int, str], dict[str, Any]] = {400: BASE_RESPONSES[400]}
BASE_401_RESPONSE: Mapping[Union[int, str], dict[str, Any]] = {401: BASE_RESPONSES[401]}
BASE_403_RESPONSE: Mapping[Union[int, str], dict[str, Any]] = {403: BASE_RESPONSES[403]}
BASE_404_RESPONSE: Mapping[Union[int, str], dict[str, Any]] = {404: BASE_RESPONSES[404]}
BASE_409_RESPONSE: Mapping[Union[int, str], dict[str, Any]] = {409: BASE_RESPONSES[409]}
BASE_422_RESPONSE: Mapping[Union[int, str], dict[str, Any]] = {422: BASE_RESPONSES[422]}
BASE_500_RESPONSE: Mapping[Union[int, str], dict[str, Any]] = {500: BASE_RESPONSES[500]}

PUBLIC_ERROR_RESPONSES = {**BASE_404_RESPONSE, **BASE_500_RESPONSE}
ACCESS_CONTROL_ERROR_RESPONSES = {**BASE_401_RESPONSE, **BASE_403_RESPONSE}
VALIDATION_ERROR_RESPONSES = {**BASE_400_RESPONSE, **BASE_422_RESPONSE}
