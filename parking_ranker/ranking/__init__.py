"""
Multi-criterion carpark ranking.

Responsibilities:
- Validate user priority ranks and the arrival time before any work starts.
- Rank candidates independently by availability, hourly rate and weather.
- Join the per-criterion scores and order candidates by weighted score.
"""
