# profile_studio/app.py
import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from profile_studio import config, optimizer, scraper
from profile_studio.normalizer import normalize_profile
from profile_studio.schemas import (
    OptimizedContent,
    OptimizeRequest,
    PostRequest,
    PostResponse,
    ProfileRecord,
    RegenerateRequest,
    RegenerateResponse,
    ScrapeRequest,
)

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Profile Studio API")

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "model": config.CHAT_MODEL,
        "scraper_configured": bool(config.APIFY_API_TOKEN),
        "optimizer_configured": bool(config.GROQ_API_KEY),
    }


@app.post("/scrape", response_model=ProfileRecord)
async def scrape(req: ScrapeRequest):
    """
    Scrape a public LinkedIn profile and return it in canonical form.
    """
    if not scraper.is_linkedin_profile_url(req.url):
        raise HTTPException(status_code=400, detail="Invalid LinkedIn URL")
    try:
        raw = await scraper.scrape_profile(req.url)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return normalize_profile(raw)


@app.post("/optimize", response_model=OptimizedContent)
async def optimize(req: OptimizeRequest):
    """
    Rewrite headline, about and experience bullets for the given profile.
    """
    try:
        return await optimizer.optimize_profile(req.profile)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/regenerate", response_model=RegenerateResponse)
async def regenerate(req: RegenerateRequest):
    try:
        text = await optimizer.regenerate_section(req.section, req.feedback, req.profile)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return RegenerateResponse(section=req.section, text=text)


@app.post("/generate-post", response_model=PostResponse)
async def generate_post(req: PostRequest):
    if not req.message.strip():
        raise HTTPException(status_code=400, detail="Message is empty")
    try:
        text = await optimizer.generate_post(req.message, req.history)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return PostResponse(message=text)
