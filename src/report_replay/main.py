from fastapi import FastAPI, Request, HTTPException, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import settings
from .models import MetricSample

app = FastAPI(title="Report Collector Stub", version="0.1.0")
app.state.received_lines = 0

def tenant_dependency(request: Request):
    if settings.allow_anon:
        return
    if not request.headers.get(settings.tenant_header):
        raise HTTPException(status_code=401, detail=f"missing {settings.tenant_header} header")

@app.get("/healthz", response_class=PlainTextResponse)
def healthz():
    return "ok"

@app.post("/report", dependencies=[Depends(tenant_dependency)])
async def report(request: Request):
    # raw line protocol whatever the Content-Type says; nothing is form-decoded
    body = (await request.body()).decode("utf-8", errors="replace")
    lines = [ln for ln in body.split("\n") if ln.strip()]
    if not lines:
        raise HTTPException(status_code=400, detail="empty payload")
    for i, line in enumerate(lines, start=1):
        try:
            MetricSample.from_line(line)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"line {i}: cannot parse {line[:80]!r}")
    app.state.received_lines += len(lines)
    return JSONResponse(status_code=202, content={"status": "accepted", "count": len(lines)})

def run():
    import uvicorn
    uvicorn.run(app, host=settings.collector_host, port=settings.collector_port,
                log_level=settings.log_level.lower())
