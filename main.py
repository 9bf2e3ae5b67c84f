import logging
import os
import time

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from models import (
    StyleExtractionRequest, StyleExtractionResponse, GenerateImageRequest, GenerateImageResponse,
    GenerateImagesRequest, GenerateImagesResponse, UploadImageResponse
)
from config import CORS_ORIGINS, GROQ_API_KEY_PREFIX, LOG_LEVEL, REPLICATE_API_KEY_PREFIX
from platforms import PLATFORM_REGISTRY
from services.extraction_service import extract_style
from services.replicate_service import generate_image_with_retry, generate_images_for_platforms
from services.storage_service import build_upload_path, store_image
from utils.errors import InputValidationError, error_payload
from utils.validators import (
    sanitize_user_guidance, validate_api_key, validate_generation_platform, validate_image_urls,
    validate_platform_prompts, validate_prompt, validate_upload
)

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Style Prompt Extractor API",
    description="Extracts visual style from reference images into platform-specific image prompts",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, body: BaseModel) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", exclude_none=True))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Malformed request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"success": False, "error": "Invalid request body"})


@app.post("/style-extraction", response_model=StyleExtractionResponse, response_model_exclude_none=True)
async def style_extraction(body: StyleExtractionRequest):
    """
    Extract platform-specific style prompts from uploaded reference images.

    Args:
        body: imageUrls (1-5 uploaded image URLs), optional userGuidance, Groq apiKey

    Returns:
        StyleExtractionResponse: One prompt per platform, or an error
    """
    start_time = time.time()
    image_count = len(body.imageUrls) if isinstance(body.imageUrls, list) else None

    try:
        api_key = validate_api_key(body.apiKey, GROQ_API_KEY_PREFIX, "Groq")
        image_urls = validate_image_urls(body.imageUrls)
        user_guidance = sanitize_user_guidance(body.userGuidance)

        result = await extract_style(image_urls, api_key, user_guidance=user_guidance)

        processing_time = time.time() - start_time
        logger.info(f"Successfully processed style extraction for {len(image_urls)} image(s) in {processing_time:.2f}s")
        return StyleExtractionResponse(
            success=True,
            prompts=result.prompts,
            imageCount=len(image_urls),
            medium=result.medium
        )

    except Exception as e:
        status_code, message = error_payload(e, "Failed to extract style. Please try again.")
        logger.error(f"Style extraction failed ({status_code}): {message}")
        return error_response(status_code, StyleExtractionResponse(success=False, error=message, imageCount=image_count))


@app.post("/generate-image", response_model=GenerateImageResponse, response_model_exclude_none=True)
async def generate_image(body: GenerateImageRequest):
    """Generate one image for a platform from its extracted prompt."""
    platform_key = body.platform if isinstance(body.platform, str) else None

    try:
        api_key = validate_api_key(body.apiKey, REPLICATE_API_KEY_PREFIX, "Replicate")
        prompt = validate_prompt(body.prompt)
        platform = validate_generation_platform(body.platform)

        image_url = await generate_image_with_retry(prompt, platform, api_key)
        return GenerateImageResponse(success=True, imageUrl=image_url, platform=platform.key)

    except Exception as e:
        status_code, message = error_payload(e, "Failed to generate image. Please try again.")
        logger.error(f"Image generation failed ({status_code}): {message}")
        return error_response(status_code, GenerateImageResponse(success=False, error=message, platform=platform_key))


@app.post("/generate-images", response_model=GenerateImagesResponse, response_model_exclude_none=True)
async def generate_images(body: GenerateImagesRequest):
    """Generate images for several platforms concurrently."""
    try:
        api_key = validate_api_key(body.apiKey, REPLICATE_API_KEY_PREFIX, "Replicate")
        requests = validate_platform_prompts(body.prompts)

        results = await generate_images_for_platforms(requests, api_key)
        return GenerateImagesResponse(
            success=any(result.success for result in results.values()),
            results=results
        )

    except Exception as e:
        status_code, message = error_payload(e, "Failed to generate images. Please try again.")
        logger.error(f"Multi-platform generation failed ({status_code}): {message}")
        return error_response(status_code, GenerateImagesResponse(success=False, error=message))


@app.post("/upload-image", response_model=UploadImageResponse, response_model_exclude_none=True)
async def upload_image(file: UploadFile = File(None)):
    """Store an uploaded reference image and return its public URL."""
    try:
        if not file:
            raise InputValidationError("No file provided")

        content = await file.read()
        validate_upload(file.content_type, len(content))

        url = await store_image(content, build_upload_path())
        return UploadImageResponse(success=True, url=url)

    except Exception as e:
        status_code, message = error_payload(e, "Failed to upload image")
        logger.error(f"Image upload failed ({status_code}): {message}")
        return error_response(status_code, UploadImageResponse(success=False, error=message))


@app.get("/platforms")
async def list_platforms():
    """Active platform enumeration, so clients never hardcode it."""
    return {
        "version": PLATFORM_REGISTRY.version,
        "platforms": [
            {
                "key": platform.key,
                "displayName": platform.display_name,
                "supportsGeneration": platform.generation is not None,
                "modelName": platform.generation.model_name if platform.generation else None,
            }
            for platform in PLATFORM_REGISTRY.platforms
        ]
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "style-prompt-extractor-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
