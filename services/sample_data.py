"""
Sample data generators for flights, seats, flight status and pricing.
Each generator asks the model for JSON matching a pydantic schema and validates the result.
"""
import json
from typing import Type, TypeVar
from pydantic import BaseModel
from config import Config
from models.booking_models import (
    FlightSearchResults,
    FlightStatus,
    ReservationPrice,
    SeatSelection,
)
from models.chat_models import ChatContext
from utils.constants import (
    FLIGHT_SEARCH_PROMPT,
    FLIGHT_STATUS_PROMPT,
    RESERVATION_PRICE_PROMPT,
    SEAT_SELECTION_PROMPT,
)
from utils.logger import app_logger

T = TypeVar("T", bound=BaseModel)


class SampleDataService:
    """Structured-output generators backed by the chat model host."""

    @staticmethod
    async def _generate(context: ChatContext, prompt: str, schema: Type[T]) -> T:
        """Run one structured-output call and validate it against the schema."""
        call_num = context.next_call_number()
        app_logger.info(f"LLM Call #{call_num}: Generating {schema.__name__}")

        response = await context.client.chat(
            model=Config.SAMPLE_DATA_MODEL,
            messages=[{"role": "user", "content": prompt}],
            format=schema.model_json_schema(by_alias=True),
        )
        return schema.model_validate_json(response['message']['content'])

    @staticmethod
    async def generate_flight_search_results(context: ChatContext, origin: str, destination: str) -> dict:
        results = await SampleDataService._generate(
            context,
            FLIGHT_SEARCH_PROMPT.format(origin=origin, destination=destination),
            FlightSearchResults,
        )
        return results.to_wire()

    @staticmethod
    async def generate_flight_status(context: ChatContext, flight_number: str, date: str) -> dict:
        flight_status = await SampleDataService._generate(
            context,
            FLIGHT_STATUS_PROMPT.format(flight_number=flight_number, date=date),
            FlightStatus,
        )
        return flight_status.to_wire()

    @staticmethod
    async def generate_seat_selection(context: ChatContext, flight_number: str) -> dict:
        selection = await SampleDataService._generate(
            context,
            SEAT_SELECTION_PROMPT.format(flight_number=flight_number),
            SeatSelection,
        )
        return selection.to_wire()

    @staticmethod
    async def generate_reservation_price(context: ChatContext, details: dict) -> float:
        """Price a reservation from its wire-format details."""
        price = await SampleDataService._generate(
            context,
            RESERVATION_PRICE_PROMPT.format(details=json.dumps(details, indent=2)),
            ReservationPrice,
        )
        return price.total_price_in_usd
