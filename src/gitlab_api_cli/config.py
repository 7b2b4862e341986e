from pydantic import BaseModel, ConfigDict, Field


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    gitlab_url: str = Field(default="https://gitlab.com")
    api_path: str = Field(default="/api/v4")
    token: str | None = Field(default=None)
    # Exposes the client to MITM attacks when enabled
    skip_cert_verify: bool = Field(default=False)
    timeout_s: float | None = Field(default=30.0, gt=0)
    verbose: bool = Field(default=False)

    @property
    def api_url(self) -> str:
        prefix = self.api_path.strip("/")
        base = self.gitlab_url.rstrip("/")
        return f"{base}/{prefix}" if prefix else base
