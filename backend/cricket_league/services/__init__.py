"""
Services Layer

Pure tournament logic that:
- Accepts in-memory tournaments/matches (or a Session, for tournament_service)
- Returns derived values (standings, leaderboards, forecasts, dashboards)
- Does NOT depend on HTTP request/response objects
- Only mutates matches/tournaments where explicitly designed to (advancement, result updates)
"""
