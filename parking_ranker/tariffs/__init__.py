"""
Tariff resolution layer.

Responsibilities:
- Parse arrival times and resolve the day-of-week in the carpark's timezone.
- Look up published rate tables by carpark, vehicle category and time window.
- Apply the fixed central-area rule for carparks without a published table.
- Dispatch each lookup to the policy owned by the carpark's agency.
"""
