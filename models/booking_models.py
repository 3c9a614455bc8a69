"""
Booking domain models.

Fields are snake_case in Python and camelCase on the wire, which is the
shape the model reads in tool schemas and receives in tool results.
"""
from typing import List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class FlightEndpoint(CamelModel):
    """Departure or arrival point of a flight."""
    city_name: str = Field(..., description="Name of the city")
    airport_code: str = Field(..., description="IATA code of the airport")
    timestamp: str = Field(..., description="ISO 8601 date and time")
    gate: str = Field(..., description="Gate")
    terminal: str = Field(..., description="Terminal")


class ReservationDetails(CamelModel):
    """The details blob stored with every reservation."""
    seats: List[str]
    flight_number: str
    departure: FlightEndpoint
    arrival: FlightEndpoint
    passenger_name: str
    total_price_in_usd: float = Field(..., alias="totalPriceInUSD")


class BoardingPass(CamelModel):
    reservation_id: str
    passenger_name: str
    flight_number: str
    seat: str
    departure: FlightEndpoint
    arrival: FlightEndpoint


# Sample data payloads

class FlightOption(CamelModel):
    id: str
    departure: FlightEndpoint
    arrival: FlightEndpoint
    airlines: List[str]
    price_in_usd: float = Field(..., alias="priceInUSD")
    number_of_stops: int


class FlightSearchResults(CamelModel):
    flights: List[FlightOption]


class FlightStatus(CamelModel):
    flight_number: str
    departure: FlightEndpoint
    arrival: FlightEndpoint
    total_distance_in_miles: float
    total_duration_in_minutes: float
    status: str


class Seat(CamelModel):
    seat_number: str
    price_in_usd: float = Field(..., alias="priceInUSD")
    is_available: bool


class SeatSelection(CamelModel):
    seats: List[List[Seat]]


class ReservationPrice(CamelModel):
    total_price_in_usd: float = Field(..., alias="totalPriceInUSD")


# Tool parameters

class WeatherParams(CamelModel):
    latitude: float = Field(..., description="Latitude of the location")
    longitude: float = Field(..., description="Longitude of the location")


class FlightStatusParams(CamelModel):
    flight_number: str = Field(..., description="Flight number")
    date: str = Field(..., description="Date of the flight")


class SearchFlightsParams(CamelModel):
    origin: str = Field(..., description="Origin airport or city")
    destination: str = Field(..., description="Destination airport or city")


class SelectSeatsParams(CamelModel):
    flight_number: str = Field(..., description="Flight number")


class CreateReservationParams(CamelModel):
    seats: List[str] = Field(..., description="Array of selected seat numbers")
    flight_number: str = Field(..., description="Flight number")
    departure: FlightEndpoint = Field(..., description="Departure details")
    arrival: FlightEndpoint = Field(..., description="Arrival details")
    passenger_name: str = Field(..., description="Name of the passenger")


class ReservationRefParams(CamelModel):
    reservation_id: str = Field(..., description="Unique identifier for the reservation")
