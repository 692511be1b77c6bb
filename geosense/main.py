# geosense/main.py
from dotenv import load_dotenv
load_dotenv()  # finds .env in root by default

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import CORS_ORIGINS
from .errors import ConfigurationError, UpstreamError
from .fetch_news import fetch_filtered_news

app = FastAPI(title="GeoSense News Gateway")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# ---------------- Errors ----------------
@app.exception_handler(ConfigurationError)
async def configuration_error(request: Request, exc: ConfigurationError):
    print("❌  Configuration error:", exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})

@app.exception_handler(UpstreamError)
async def upstream_error(request: Request, exc: UpstreamError):
    print(f"❌  NewsAPI failed ({exc.status_code}):", exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "Failed to fetch news from NewsAPI.", "details": exc.details},
    )

# ---------------- Health ----------------
@app.get("/health")
def health():
    return {"status": "ok"}

# ---------------- News ----------------
@app.get("/news")
def news(exclude: Optional[str] = None,
         page: Optional[str] = None,
         pageSize: Optional[str] = None):
    """
    Proxy NewsAPI top headlines (country=us) and return up to 4 informative
    articles not listed in `exclude` (JSON array or comma-separated titles).
    `page`/`pageSize` are passed through; invalid values fall back to 1/30.
    """
    print("📰  Fetching news page", page or 1)
    articles = fetch_filtered_news(exclude=exclude, page=page, page_size=pageSize)
    print(f"✅  Returned {len(articles)} articles.")
    return {"articles": articles}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
