import logging
import traceback

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from .errors import classify_error, error_message
from .models import ErrorResponse, ProcessPaperRequest, SpeechRequest, SummaryRequest, SummaryResponse, VOICES
from .llm import complete_summary
from .speech import synthesize
from . import paper_store

app = FastAPI(title="Paper Assistant")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@app.middleware("http")
async def cors(request: Request, call_next):
    # preflight never reaches the routes
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


def error_response(context: str, exc: Exception) -> JSONResponse:
    logger.error(f"Error in {context}: {traceback.format_exc()}")
    body = ErrorResponse(error=error_message(exc), kind=classify_error(exc))
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


# ===== API Routes =====

@app.post("/api/generate-summary")
async def api_generate_summary(request: Request):
    try:
        req = SummaryRequest.model_validate(await request.json())
        logger.info(f"Generating summary: format={req.format}")
        summary = await complete_summary(req.text, req.format)
        return SummaryResponse(summary=summary)
    except Exception as e:
        return error_response("generate-summary", e)


@app.post("/api/process-paper")
async def api_process_paper(request: Request):
    try:
        req = ProcessPaperRequest.model_validate(await request.json())
        logger.info(f"Processing paper: operation={req.operation}")
        if req.operation == "store":
            return await paper_store.store_paper(req.paperText)
        return await paper_store.find_similar(req.paperText)
    except Exception as e:
        return error_response("process-paper", e)


@app.post("/api/text-to-speech")
async def api_text_to_speech(request: Request):
    try:
        req = SpeechRequest.model_validate(await request.json())
        audio = await synthesize(req.text, req.voiceId)
        return Response(content=audio, media_type="audio/mpeg")
    except Exception as e:
        return error_response("text-to-speech", e)


@app.get("/api/papers")
async def api_recent_papers():
    return paper_store.recent_papers()


@app.get("/api/voices")
async def api_voices():
    return VOICES


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
