import json


DEFAULT_WEATHER_RESPONSE = {
    "latitude": 37.76,
    "longitude": -122.42,
    "timezone": "America/Los_Angeles",
    "current": {"time": "2026-10-18T09:00", "temperature_2m": 17.4},
    "hourly": {"time": ["2026-10-18T00:00", "2026-10-18T01:00"], "temperature_2m": [14.2, 13.9]},
    "daily": {"time": ["2026-10-18"], "sunrise": ["2026-10-18T07:18"], "sunset": ["2026-10-18T18:29"]},
}


SFO_DEPARTURE = {
    "cityName": "San Francisco",
    "airportCode": "SFO",
    "timestamp": "2026-10-20T08:15:00Z",
    "gate": "A12",
    "terminal": "2",
}

JFK_ARRIVAL = {
    "cityName": "New York",
    "airportCode": "JFK",
    "timestamp": "2026-10-20T16:45:00Z",
    "gate": "B7",
    "terminal": "4",
}

RESERVATION_REQUEST = {
    "seats": ["4C"],
    "flightNumber": "UA 1842",
    "departure": SFO_DEPARTURE,
    "arrival": JFK_ARRIVAL,
    "passengerName": "Jordan Lee",
}

RESERVATION_DETAILS = {**RESERVATION_REQUEST, "totalPriceInUSD": 425.0}


FLIGHT_SEARCH_JSON = json.dumps({
    "flights": [
        {
            "id": "result_1",
            "departure": SFO_DEPARTURE,
            "arrival": JFK_ARRIVAL,
            "airlines": ["United Airlines"],
            "priceInUSD": 398.0,
            "numberOfStops": 0,
        }
    ]
})

FLIGHT_STATUS_JSON = json.dumps({
    "flightNumber": "UA 1842",
    "departure": SFO_DEPARTURE,
    "arrival": JFK_ARRIVAL,
    "totalDistanceInMiles": 2586,
    "totalDurationInMinutes": 330,
    "status": "On Time",
})

SEAT_SELECTION_JSON = json.dumps({
    "seats": [
        [
            {"seatNumber": "1A", "priceInUSD": 150.0, "isAvailable": False},
            {"seatNumber": "1B", "priceInUSD": 120.0, "isAvailable": True},
        ]
    ]
})

RESERVATION_PRICE_JSON = json.dumps({"totalPriceInUSD": 425.0})
