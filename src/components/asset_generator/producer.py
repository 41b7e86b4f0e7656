"""Asset producers: turn scene and character descriptions into image handles."""

from abc import ABC, abstractmethod
from typing import Any, Optional

import litellm
from shared.config import config
from shared.errors import RenderError
from shared.logging import get_logger

# Initialize logger
logger = get_logger(__name__)

DEFAULT_MIME_TYPE = "image/png"


class AssetProducer(ABC):
    """Renders backgrounds and character portraits. Each call may fail."""

    @abstractmethod
    async def render_background(self, description: str) -> str:
        """Render a scene background; return an image handle."""

    @abstractmethod
    async def render_portrait(self, name: str, description: str, emotion: str) -> str:
        """Render one expression of a character; return an image handle."""


def image_handle_from_response(response: Any) -> Optional[str]:
    """
    Extract an image handle from a litellm ImageResponse.

    Inline data is returned as a ``data:`` URI; hosted images as their URL.
    """
    for item in getattr(response, "data", None) or []:
        b64_json = getattr(item, "b64_json", None)
        if b64_json:
            return f"data:{DEFAULT_MIME_TYPE};base64,{b64_json}"
        url = getattr(item, "url", None)
        if url:
            return url
    return None


class LiteLLMAssetProducer(AssetProducer):
    """Asset producer backed by litellm's image generation endpoint."""

    def __init__(self, model: Optional[str] = None, **kwargs: Any):
        self.model = model or config.IMAGE_MODEL
        self.default_params = {**config.IMAGE_PARAMETERS, **kwargs}

    async def _generate(self, subject: str, prompt: str) -> str:
        try:
            response = await litellm.aimage_generation(
                prompt=prompt, model=self.model, **self.default_params
            )
        except Exception as e:
            raise RenderError(subject, str(e)) from e

        handle = image_handle_from_response(response)
        if not handle:
            raise RenderError(subject, "No image generated")
        return handle

    async def render_background(self, description: str) -> str:
        prompt = config.asset_producer["background_prompt"].format(
            description=description
        )
        logger.debug(f"Background prompt: {prompt}")
        return await self._generate("background", prompt)

    async def render_portrait(self, name: str, description: str, emotion: str) -> str:
        prompt = config.asset_producer["portrait_prompt"].format(
            name=name, description=description, emotion=emotion
        )
        logger.debug(f"Portrait prompt for {name} ({emotion}): {prompt}")
        return await self._generate(f"portrait of {name} ({emotion})", prompt)
