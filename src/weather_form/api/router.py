"""
Chat and location lookup endpoints.

``/api/chat`` forwards a message, with its history, to the chat provider.
``/api/validate-city`` proxies the provider's location search; deciding
whether the result makes the location valid stays with the form.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from weather_form.ai.base import ChatProvider
from weather_form.api.dependencies import get_chat_provider
from weather_form.api.schemas import ChatRequest, ChatResponse, ErrorResponse
from weather_form.integrations.weather_lookup.client import WeatherLookupClient
from weather_form.integrations.weather_lookup.dependencies import (
    get_weather_lookup_client,
)
from weather_form.integrations.weather_lookup.exceptions import WeatherLookupError
from weather_form.integrations.weather_lookup.schemas import LocationMatch
from weather_form.utils.logger import logger

router = APIRouter(tags=["Weather"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    request: ChatRequest,
    provider: Annotated[ChatProvider, Depends(get_chat_provider)],
) -> ChatResponse | JSONResponse:
    """
    Generate the assistant's reply to a weather question.

    Args:
        request: Message and prior conversation turns
        provider: Chat provider dependency

    Returns:
        ChatResponse: Reply text and token usage
    """
    if not request.message.strip():
        return JSONResponse(
            status_code=400, content=ErrorResponse(error="Message is required").model_dump()
        )

    try:
        reply = await provider.send(request.message, request.conversation_history)
    except Exception as e:
        logger.error("Error generating chat response", error=str(e))
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Failed to generate response", details=str(e)
            ).model_dump(),
        )

    return ChatResponse(response=reply.text, usage=reply.usage)


@router.get(
    "/validate-city",
    response_model=list[LocationMatch],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def validate_city(
    client: Annotated[WeatherLookupClient, Depends(get_weather_lookup_client)],
    city: Annotated[str | None, Query()] = None,
    country: Annotated[str | None, Query()] = None,
) -> list[LocationMatch] | JSONResponse:
    """
    Return the provider's candidate locations for a city and country.

    Args:
        client: Weather lookup client dependency
        city: City name
        country: Country name

    Returns:
        list[LocationMatch]: Matches, empty when the provider knows none
    """
    if not city or not country:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="City and country are required").model_dump(),
        )

    try:
        return await client.search(city, country)
    except WeatherLookupError as e:
        logger.error("Error validating city", error=str(e))
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Failed to validate city").model_dump(),
        )
