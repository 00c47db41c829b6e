"""Live reload — SSE push of rebuild notifications to the browser."""
