from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    collector_url: str = Field("http://localhost:8085/report", alias="COLLECTOR_URL")
    tenant_id: str = Field("16", alias="TENANT_ID")
    tenant_header: str = Field("dx_tenant_id", alias="TENANT_HEADER")
    request_timeout: float = Field(30.0, alias="REQUEST_TIMEOUT")
    # input
    metrics_dir: str = Field("./test/wf-dumps/locust-loadgen-0", alias="METRICS_DIR")
    file_suffix: str = Field(".txt.log", alias="FILE_SUFFIX")
    max_line_bytes: int = Field(1024 * 1024, alias="MAX_LINE_BYTES")
    # replay
    replay_count: int = Field(1, alias="REPLAY_COUNT")
    sleep_between: float = Field(1.0, alias="SLEEP_BETWEEN")
    batch_size: int = Field(5000, alias="BATCH_SIZE")
    content_type: str = Field("application/octet-stream", alias="CONTENT_TYPE")
    # stub collector
    allow_anon: bool = Field(False, alias="ALLOW_ANON")
    collector_host: str = Field("127.0.0.1", alias="COLLECTOR_HOST")
    collector_port: int = Field(8085, alias="COLLECTOR_PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        extra = "allow"

settings = Settings()
