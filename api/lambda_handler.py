"""
AWS Lambda entrypoint for API Gateway (REST, proxy integration).

Routes:
  GET     /dishes          - list dishes
  GET     /dishes/{id}     - get one dish
  POST    /dishes          - create dish
  PUT     /dishes/{id}     - replace dish fields
  POST    .../vote         - vote on a dish (dishId in body or {id} in path)
  OPTIONS *                - CORS preflight

Environment variables:
  TABLE_NAME     DynamoDB table holding the dishes
  AWS_REGION     default: us-east-1
"""

import base64
import binascii
import json
import logging

from pydantic import ValidationError

from api.dependencies import get_dish_store
from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError, StoreUnavailableError
from domain.schemas.dish_schemas import DishCreate, DishReplace, VoteRequest
from services import DishService

logger = logging.getLogger("buffetrating.lambda")
logger.setLevel(getattr(logging, settings.log_level.upper()))

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "*",
}


class MalformedRequestError(Exception):
    """Raised when the request body cannot be decoded into a JSON object"""


def _response(status_code, body):
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json", **CORS_HEADERS},
        "body": json.dumps(body, default=str),
    }


def _parse_body(event) -> dict:
    body = event.get("body")
    if body is None or body == "":
        return {}
    if isinstance(body, dict):
        return body
    if event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise MalformedRequestError("Body is not valid base64-encoded UTF-8") from e
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as e:
        raise MalformedRequestError(f"Body is not valid JSON: {e.msg}") from e
    if not isinstance(parsed, dict):
        raise MalformedRequestError("Body must be a JSON object")
    return parsed


def _dispatch(method, path, path_params, body):
    store = get_dish_store()
    dish_id = path_params.get("id")
    path = path.rstrip("/") or "/"

    if method == "GET":
        if path == "/dishes":
            return _response(200, DishService.list_dishes(store))
        if dish_id:
            return _response(200, DishService.get_dish(store, dish_id))

    elif method == "POST":
        if "/vote" in path:
            if dish_id and "dishId" not in body and "dish_id" not in body:
                body = {**body, "dishId": dish_id}
            request = VoteRequest.model_validate(body)
            dish = DishService.vote(
                store, request.dish_id, request.user_email, request.vote
            )
            return _response(200, dish)
        if path == "/dishes":
            dish = DishService.create_dish(store, DishCreate.model_validate(body))
            return _response(201, dish)

    elif method == "PUT":
        if dish_id:
            dish = DishService.replace_dish(
                store, dish_id, DishReplace.model_validate(body)
            )
            return _response(200, dish)

    elif method == "OPTIONS":
        return _response(200, {"message": "CORS preflight"})

    else:
        return _response(405, {"error": "Method not allowed"})

    return _response(404, {"error": "Route not found"})


def lambda_handler(event, context):
    logger.info("EVENT: %s", json.dumps(event, default=str))

    method = (event.get("httpMethod") or "").upper()
    path = event.get("path") or ""
    path_params = event.get("pathParameters") or {}
    logger.info("Method: %s, Path: %s", method, path)

    try:
        body = _parse_body(event)
        return _dispatch(method, path, path_params, body)
    except MalformedRequestError as e:
        logger.warning("Malformed request: %s", e)
        return _response(400, {"error": str(e)})
    except ValidationError as e:
        logger.warning("Request validation failed: %s", e)
        return _response(
            400,
            {
                "error": "Request validation failed",
                "details": e.errors(include_url=False, include_context=False),
            },
        )
    except NotFoundError as e:
        logger.warning("Not found: %s", e)
        return _response(404, {"error": str(e)})
    except ServiceValidationError as e:
        logger.warning("Rejected request: %s", e)
        return _response(400, {"error": str(e), "code": e.code})
    except StoreUnavailableError as e:
        logger.exception("Record store failure during %s: %s", e.operation, e)
        return _response(500, {"error": "Internal server error"})
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return _response(500, {"error": "Internal server error"})
