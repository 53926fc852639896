"""
Family activity recommendation engine.

Responsibilities:
- Validate the activity search request (location, ages, date, time slot, radius).
- Render the search prompt and parse the model reply into recommendation cards.
- Run one provider or fan out to every configured provider with per-provider timeouts.
- Sanitise free text going into prompts and error text going out to clients.
"""
