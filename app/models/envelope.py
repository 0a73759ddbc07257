from typing import Any, Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

class ApiResponse(BaseModel):
    status: int
    message: str
    data: Optional[Any] = None

def api_response(status: int, message: str, data: Any = None) -> JSONResponse:
    """Uniform {status, message, data} reply; HTTP status mirrors the body."""
    body = ApiResponse(status=status, message=message, data=data)
    return JSONResponse(status_code=status, content=jsonable_encoder(body))
