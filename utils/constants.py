"""
Constants and system prompts for the Flight Booking Chat application.
"""

BOOKING_SYSTEM_PROMPT = """You help users book flights.
Today's Date: {current_date}

- Keep your responses limited to a sentence.
- DO NOT output lists.
- After every tool call, pretend you're showing the result to the user and keep your response limited to a phrase.
- Ask follow up questions to nudge the user into the optimal flow.
- Ask for any details you don't know, like the name of the passenger.
- C and D are aisle seats, A and F are window seats, B and E are middle seats.
- Assume the most popular airports for the origin and destination.

Optimal flow:
1. search for flights
2. choose flight
3. select seats
4. create reservation (ask the user whether to proceed with payment or change the reservation)
5. authorize payment (requires user consent, wait for the user to finish payment and tell you when done)
6. verify payment
7. display boarding pass (NEVER display a boarding pass without verifying payment)"""

# Prompts for the structured-output sample data generators
FLIGHT_SEARCH_PROMPT = """Generate search results for flights from {origin} to {destination}.
Limit to 4 results. Use realistic airlines, gates, terminals and ISO 8601 timestamps."""

FLIGHT_STATUS_PROMPT = """Generate the flight status for flight number {flight_number} on {date}.
Use realistic cities, airports, gates, terminals and ISO 8601 timestamps."""

SEAT_SELECTION_PROMPT = """Simulate available seats for flight number {flight_number}.
Use 6 seats in each row (A to F) and 5 rows in total, and adjust pricing based on the location of the seat."""

RESERVATION_PRICE_PROMPT = """Generate a total price in USD for the following reservation:

{details}"""


class ToolNames:
    """Names the model uses to call tools."""
    GET_WEATHER = "getWeather"
    DISPLAY_FLIGHT_STATUS = "displayFlightStatus"
    SEARCH_FLIGHTS = "searchFlights"
    SELECT_SEATS = "selectSeats"
    CREATE_RESERVATION = "createReservation"
    AUTHORIZE_PAYMENT = "authorizePayment"
    VERIFY_PAYMENT = "verifyPayment"
    DISPLAY_BOARDING_PASS = "displayBoardingPass"


class ErrorMessages:
    """Error payloads returned to the model and the caller."""
    SESSION_LOST = "User session lost. Cannot create reservation."
    SESSION_REQUIRED = "User session lost. Please sign in again."
    RESERVATION_NOT_FOUND = "Reservation {reservation_id} not found."
    RESERVATION_NOT_OWNED = "Reservation {reservation_id} does not belong to the current user."
    PAYMENT_NOT_COMPLETED = "Payment not completed for this reservation. Cannot display boarding pass."
    INVALID_RESERVATION_DETAILS = "Invalid reservation details structure in database."
    BOARDING_PASS_FAILED = "An internal error occurred while retrieving boarding pass details."
    UNKNOWN_TOOL = "Unknown tool: {name}"
    INVALID_TOOL_ARGUMENTS = "Invalid arguments for {name}: {details}"
    TOOL_FAILED = "An internal error occurred while running {name}."
    CHAT_ID_REQUIRED = "Chat ID is required"
    CHAT_NOT_FOUND = "Chat not found"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    DELETE_FAILED = "An internal error occurred while deleting the chat."
