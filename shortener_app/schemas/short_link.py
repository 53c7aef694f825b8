from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

_http_url = TypeAdapter(HttpUrl)


class ShortenRequest(BaseModel):
    long_url: str = Field(..., description="The original URL to be shortened")

    @field_validator("long_url")
    @classmethod
    def must_be_http_url(cls, value: str) -> str:
        """Validate as http(s) URL but keep the caller's exact spelling"""
        value = value.strip()
        if not value:
            raise ValueError("long_url must not be empty")
        try:
            _http_url.validate_python(value)
        except ValidationError:
            raise ValueError("long_url must be a valid http(s) URL")
        return value


class ShortenResponse(BaseModel):
    short_code: str
    short_url: str
    long_url: str
