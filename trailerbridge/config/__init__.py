"""TrailerBridge configuration package."""
