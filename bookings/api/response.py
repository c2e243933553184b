from typing import Any, Optional

from rest_framework.response import Response


class APIResponse:
    """Standardized API response format."""

    @staticmethod
    def success(
        data: Any = None,
        message: str = "Success",
        status_code: int = 200,
        meta: Optional[dict] = None,
    ) -> Response:
        """Return a successful API response."""
        response_data = {
            "success": True,
            "message": message,
        }
        if data is not None:
            response_data["data"] = data
        if meta:
            response_data["meta"] = meta
        return Response(response_data, status=status_code)

    @staticmethod
    def paginated(
        data: Any,
        page: int,
        limit: int,
        total: int,
        message: str = "Success",
        status_code: int = 200,
    ) -> Response:
        """Return paginated response with metadata."""
        total_pages = (total + limit - 1) // limit if limit > 0 else 1
        response_data = {
            "success": True,
            "message": message,
            "data": data,
            "meta": {
                "pagination": {
                    "page": page,
                    "limit": limit,
                    "total": total,
                    "total_pages": total_pages,
                }
            },
        }
        return Response(response_data, status=status_code)
