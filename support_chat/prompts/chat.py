"""
Customer-support chat prompts.
"""

SYSTEM_PROMPT = """You are a helpful and friendly customer support agent for a small e-commerce store.
Always be polite, concise, and professional."""

# Returned when the provider answered but no text could be extracted.
FALLBACK_REPLY = (
    "Sorry, I couldn't generate a response right now. Please try again in a moment."
)

DEV_ECHO_TEMPLATE = "DEV-MOCK: I received your message: {message}"
