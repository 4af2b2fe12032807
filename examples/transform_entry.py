"""
A transformer can reformat entries and filter them.

This one keeps access logs but drops every other info entry, renders plain
text, and appends a consumer-defined `suffix` after a comma.

Run with:
    uvicorn examples.transform_entry:app --port 3000
then:
    curl http://localhost:3000/
"""

from fastapi import FastAPI, Response

import chainlogger
from chainlogger.config.settings import get_settings

chainlogger.setup_logging(get_settings())

def transform_entry(level: chainlogger.LogLevel, entry: chainlogger.LogEntry) -> str | None:
    # suppress info logging, but keep access logs
    if level is chainlogger.LogLevel.INFO and not entry.is_access_log:
        return None

    result = f"{entry.process_time} {entry.message}"
    if entry.suffix:
        result += f" , {entry.suffix}"
    return result

chainlogger.set_transformer(transform_entry)

app = FastAPI()
app.add_middleware(chainlogger.CorrelationIdMiddleware)
app.add_middleware(chainlogger.AccessLogMiddleware)

@app.get("/")
async def index():
    chainlogger.error("errors are logged")
    chainlogger.info("info - not logged")
    return Response(status_code=204)

entry = chainlogger.make_entry("call: curl http://localhost:3000/")
entry.suffix = "please"
chainlogger.apply_log_function(chainlogger.LogLevel.WARN, entry)
