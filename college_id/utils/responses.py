from typing import Any, Dict, List, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from college_id.schemas.response_schemas import ErrorResponse
from college_id.utils.logging import get_request_id


class ResponseBuilder:
    """Builder class for the service's JSON responses"""

    @staticmethod
    def success(
        data: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_200_OK,
    ) -> JSONResponse:
        """Wrap ``data`` in a ``{"success": true, ...}`` envelope"""
        content = {"success": True, **(data or {})}
        return JSONResponse(status_code=status_code, content=jsonable_encoder(content))

    @staticmethod
    def collection(
        items: List[Any],
        status_code: int = status.HTTP_200_OK,
    ) -> JSONResponse:
        """Return a bare JSON array"""
        return JSONResponse(status_code=status_code, content=jsonable_encoder(items))

    @staticmethod
    def error(
        request: Request,
        message: str = "An error occurred",
        errors: Optional[List[Dict[str, Any]]] = None,
        error_code: Optional[str] = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        retryable: Optional[bool] = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> JSONResponse:
        """Create an error response"""
        response = ErrorResponse(
            error=message,
            error_code=error_code,
            errors=errors,
            retryable=retryable,
            meta=meta,
            request_id=getattr(request.state, "request_id", None) or get_request_id(),
            path=str(request.url.path),
        )
        return JSONResponse(
            status_code=status_code,
            content=response.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
