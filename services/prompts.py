"""Prompt templates and fixed user-facing texts."""

from __future__ import annotations

from models.product_record import ProductDraft

GREETING = (
	"Hello! I'm your AI marketplace assistant. I can help you with product questions, "
	"shipping information, customization requests, and more. How can I help you today?"
)

FALLBACK_REPLY = "I'm sorry, I'm having trouble responding right now. Please try again in a moment."

MISSING_FIELDS_ERROR = "Please fill in at least the product name and category"
UNKNOWN_CATEGORY_ERROR = "Please choose a category from the list"
NEGATIVE_PRICE_ERROR = "Price must be a non-negative number"
GENERATION_ERROR = "Failed to generate description. Please try again."

TURN_NOT_SAVED_WARNING = "Your message could not be saved."
PRODUCT_NOT_SAVED_WARNING = "The description was generated but could not be saved."


def support_prompt(customer_message: str) -> str:
	"""Return the customer-support prompt wrapping the raw customer message."""
	return (
		"You are a helpful customer support assistant for an artisan marketplace. You help customers with:\n"
		"- Product information and recommendations\n"
		"- Shipping and delivery questions\n"
		"- Customization and special requests\n"
		"- Order status and returns\n"
		"- General marketplace guidance\n\n"
		"Be friendly, professional, and knowledgeable. Keep responses concise but helpful.\n\n"
		f'Customer message: "{customer_message}"\n\n'
		"Provide a helpful response that addresses their question or concern."
	)


def description_prompt(draft: ProductDraft) -> str:
	"""Return the marketing-description prompt for a product draft."""
	materials = draft.materials.strip() or "Not specified"
	price_text = draft.price.strip()
	price = f"${price_text}" if price_text else "Contact for pricing"
	return (
		"Create a compelling, professional product description for an artisan marketplace.\n\n"
		"Product Details:\n"
		f"- Name: {draft.name.strip()}\n"
		f"- Category: {draft.category.strip()}\n"
		f"- Materials: {materials}\n"
		f"- Price: {price}\n\n"
		"Write a description that:\n"
		"- Highlights the craftsmanship and unique qualities\n"
		"- Appeals to customers looking for handmade, authentic items\n"
		"- Mentions the materials and construction process\n"
		"- Creates an emotional connection\n"
		"- Is 100-150 words\n"
		"- Has a professional, engaging tone\n\n"
		"Focus on the artisan's skill, the product's uniqueness, and why someone would want to own this piece."
	)
