"""
Tools the model may call while booking a flight.

Each tool pairs a pydantic parameter model (exported as the JSON schema the
model sees) with an async handler. Handlers never raise to the caller:
failures come back as {"error": ...} so the conversation can continue.

The one enforced workflow rule is that a boarding pass is only produced
from a stored, schema-valid reservation whose payment has completed.
"""
import copy
import uuid
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Type
from pydantic import BaseModel, ValidationError
from models.booking_models import (
    BoardingPass,
    CreateReservationParams,
    FlightStatusParams,
    ReservationDetails,
    ReservationRefParams,
    SearchFlightsParams,
    SelectSeatsParams,
    WeatherParams,
)
from models.chat_models import BookingStage, ChatContext
from services.sample_data import SampleDataService
from services.weather import WeatherService
from utils.constants import ErrorMessages, ToolNames
from utils.logger import app_logger
from utils.store import ReservationRecord, get_store

ToolHandler = Callable[[BaseModel, ChatContext], Awaitable[dict]]


def _inline_refs(schema: dict) -> dict:
    """Replace local $ref pointers with their definitions; tool schemas must be self-contained."""
    defs = schema.get("$defs", {})

    def resolve(node):
        if isinstance(node, dict):
            ref = node.get("$ref")
            if ref and ref.startswith("#/$defs/"):
                target = copy.deepcopy(defs[ref.split("/")[-1]])
                extras = {k: v for k, v in node.items() if k != "$ref"}
                return resolve({**target, **extras})
            if len(node.get("allOf", [])) == 1:
                extras = {k: v for k, v in node.items() if k != "allOf"}
                return resolve({**node["allOf"][0], **extras})
            return {k: resolve(v) for k, v in node.items() if k != "$defs"}
        if isinstance(node, list):
            return [resolve(item) for item in node]
        return node

    return resolve(schema)


@dataclass(frozen=True)
class ToolSpec:
    """A named tool: description, parameter schema and handler."""
    name: str
    description: str
    parameters: Type[BaseModel]
    handler: ToolHandler

    def definition(self) -> dict:
        """Tool definition in the shape the chat API expects."""
        schema = _inline_refs(self.parameters.model_json_schema(by_alias=True))
        schema.pop("title", None)
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": schema,
            },
        }


def _owned_reservation(context: ChatContext, reservation_id: str) -> tuple[ReservationRecord | None, dict | None]:
    """
    Re-resolve the session and load a reservation the caller owns.

    Returns:
        Tuple of (reservation, None) on success or (None, error payload)
    """
    session = context.capability.resolve()
    if session is None:
        return None, {"error": ErrorMessages.SESSION_REQUIRED}

    reservation = get_store().get_reservation_by_id(reservation_id)
    if reservation is None:
        return None, {"error": ErrorMessages.RESERVATION_NOT_FOUND.format(reservation_id=reservation_id)}

    if reservation.user_id != session.user_id:
        app_logger.warning(f"User {session.user_id} requested reservation {reservation_id} owned by another user")
        return None, {"error": ErrorMessages.RESERVATION_NOT_OWNED.format(reservation_id=reservation_id)}

    return reservation, None


async def get_weather(params: WeatherParams, context: ChatContext) -> dict:
    return await WeatherService.get_weather(params.latitude, params.longitude)


async def display_flight_status(params: FlightStatusParams, context: ChatContext) -> dict:
    return await SampleDataService.generate_flight_status(context, params.flight_number, params.date)


async def search_flights(params: SearchFlightsParams, context: ChatContext) -> dict:
    results = await SampleDataService.generate_flight_search_results(context, params.origin, params.destination)
    return {**results, "stage": BookingStage.SEARCHED.value}


async def select_seats(params: SelectSeatsParams, context: ChatContext) -> dict:
    selection = await SampleDataService.generate_seat_selection(context, params.flight_number)
    return {**selection, "stage": BookingStage.SEATS_SELECTED.value}


async def create_reservation(params: CreateReservationParams, context: ChatContext) -> dict:
    """Price and persist a reservation for the current user."""
    requested = params.to_wire()
    total_price = await SampleDataService.generate_reservation_price(context, requested)

    # Re-check: the session may have lapsed while the model was streaming
    session = context.capability.resolve()
    if session is None:
        app_logger.warning("Session lost before reservation could be created")
        return {"error": ErrorMessages.SESSION_LOST}

    details = ReservationDetails(
        seats=params.seats,
        flight_number=params.flight_number,
        departure=params.departure,
        arrival=params.arrival,
        passenger_name=params.passenger_name,
        total_price_in_usd=total_price,
    ).to_wire()

    store = get_store()
    reservation_id = str(uuid.uuid4())
    while store.get_reservation_by_id(reservation_id) is not None:
        reservation_id = str(uuid.uuid4())

    store.create_reservation(reservation_id, session.user_id, details)
    app_logger.info(f"Reservation {reservation_id} created for user {session.user_id}")

    return {"id": reservation_id, **details, "stage": BookingStage.RESERVED.value}


async def authorize_payment(params: ReservationRefParams, context: ChatContext) -> dict:
    # Payment itself is completed outside the conversation
    return {"reservationId": params.reservation_id, "stage": BookingStage.PAYMENT_PENDING.value}


async def verify_payment(params: ReservationRefParams, context: ChatContext) -> dict:
    reservation, error = _owned_reservation(context, params.reservation_id)
    if error:
        return error

    stage = BookingStage.PAYMENT_VERIFIED if reservation.has_completed_payment else BookingStage.PAYMENT_PENDING
    return {
        "reservationId": reservation.id,
        "hasCompletedPayment": reservation.has_completed_payment,
        "stage": stage.value,
    }


async def display_boarding_pass(params: ReservationRefParams, context: ChatContext) -> dict:
    """
    Build a boarding pass from the stored reservation.

    Anything the model echoes besides the reservation id is ignored; every
    field comes from the persisted record after schema validation.
    """
    app_logger.info(f"Attempting to display boarding pass for reservation {params.reservation_id}")

    reservation, error = _owned_reservation(context, params.reservation_id)
    if error:
        return error

    if not reservation.has_completed_payment:
        return {"error": ErrorMessages.PAYMENT_NOT_COMPLETED}

    try:
        details = ReservationDetails.model_validate(reservation.details, strict=True)
    except ValidationError as e:
        app_logger.error(f"Reservation details validation failed for {reservation.id}: {e.errors()}")
        return {"error": ErrorMessages.INVALID_RESERVATION_DETAILS}

    boarding_pass = BoardingPass(
        reservation_id=reservation.id,
        passenger_name=details.passenger_name,
        flight_number=details.flight_number,
        seat=", ".join(details.seats),
        departure=details.departure,
        arrival=details.arrival,
    )
    app_logger.info(f"Prepared boarding pass for {reservation.id}")
    return {**boarding_pass.to_wire(), "stage": BookingStage.BOARDING_PASS_ISSUED.value}


TOOL_REGISTRY: Dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            ToolNames.GET_WEATHER,
            "Get the current weather at a location",
            WeatherParams,
            get_weather,
        ),
        ToolSpec(
            ToolNames.DISPLAY_FLIGHT_STATUS,
            "Display the status of a flight",
            FlightStatusParams,
            display_flight_status,
        ),
        ToolSpec(
            ToolNames.SEARCH_FLIGHTS,
            "Search for flights based on the given parameters",
            SearchFlightsParams,
            search_flights,
        ),
        ToolSpec(
            ToolNames.SELECT_SEATS,
            "Select seats for a flight",
            SelectSeatsParams,
            select_seats,
        ),
        ToolSpec(
            ToolNames.CREATE_RESERVATION,
            "Display pending reservation details",
            CreateReservationParams,
            create_reservation,
        ),
        ToolSpec(
            ToolNames.AUTHORIZE_PAYMENT,
            "User will enter credentials to authorize payment, wait for user to respond when they are done",
            ReservationRefParams,
            authorize_payment,
        ),
        ToolSpec(
            ToolNames.VERIFY_PAYMENT,
            "Verify payment status",
            ReservationRefParams,
            verify_payment,
        ),
        ToolSpec(
            ToolNames.DISPLAY_BOARDING_PASS,
            "Display a boarding pass if payment is verified",
            ReservationRefParams,
            display_boarding_pass,
        ),
    )
}


FAILURE_MESSAGES: Dict[str, str] = {
    ToolNames.DISPLAY_BOARDING_PASS: ErrorMessages.BOARDING_PASS_FAILED,
}


def tool_definitions() -> list[dict]:
    """Definitions for every registered tool."""
    return [spec.definition() for spec in TOOL_REGISTRY.values()]


async def execute_tool(name: str, arguments: dict, context: ChatContext) -> dict:
    """
    Validate arguments and run a tool.

    Returns:
        The tool result, or {"error": ...} for unknown tools, bad arguments and failures
    """
    spec = TOOL_REGISTRY.get(name)
    if spec is None:
        app_logger.warning(f"Model requested unknown tool '{name}'")
        return {"error": ErrorMessages.UNKNOWN_TOOL.format(name=name)}

    if not isinstance(arguments, dict):
        app_logger.warning(f"Arguments for {name} are not a JSON object: {arguments!r}")
        return {"error": ErrorMessages.INVALID_TOOL_ARGUMENTS.format(name=name, details="expected a JSON object")}

    try:
        params = spec.parameters.model_validate(arguments)
    except ValidationError as e:
        app_logger.warning(f"Invalid arguments for {name}: {e.errors()}")
        return {"error": ErrorMessages.INVALID_TOOL_ARGUMENTS.format(name=name, details=e.errors()[0]['msg'])}

    try:
        return await spec.handler(params, context)
    except Exception as e:
        # Exception text stays in the log, never in the result
        app_logger.exception(f"Tool {name} failed: {e}")
        return {"error": FAILURE_MESSAGES.get(name, ErrorMessages.TOOL_FAILED).format(name=name)}
