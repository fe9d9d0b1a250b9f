import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from chatbot import gemini_api

# Configure logging immediately so module-level startup logs are visible
# during process startup.
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s"
)
logger = logging.getLogger("chatbot_backend")

app = FastAPI(title="Chatbot Assistant relay")

# Allow CORS for all origins (development convenience)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

GENERIC_ERROR = "Failed to process your request"


class ChatRequest(BaseModel):
    message: str


# Emit a non-secret startup diagnostic so platform logs show whether the
# credential is present in-process.
logger.info(
    "Startup GenAI status: api_key_present=%s, model=%s",
    gemini_api.api_key_present(),
    gemini_api.MODEL,
)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


@app.get("/admin/genai-status")
async def genai_status():
    """Report whether a credential is configured, without revealing it."""
    return {
        "api_key_present": gemini_api.api_key_present(),
        "model": gemini_api.MODEL,
    }


@app.post("/api/chat")
async def chat(request: Request):
    # The body is parsed inside the guarded block: a malformed request is
    # reported with the same generic failure as an upstream error.
    try:
        req = ChatRequest.model_validate(await request.json())
        logger.info("/api/chat received message (len=%d)", len(req.message))
        text = await gemini_api.generate_content(req.message)
        return {"response": text}
    except Exception as e:
        logger.exception("Error in /api/chat: %s", e)
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})
