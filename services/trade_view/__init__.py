"""Trade view service: bucket trades by calendar period and project them for charts."""
