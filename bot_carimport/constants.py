"""Shared constants for the import tax bot."""

# Button labels
BTN_CALC = "\U0001F4CA Calculate import tax"
BTN_BACK = "⬅️ Back"
BTN_MAIN_MENU = "\U0001F3E0 Main menu"
BTN_FAQ = "ℹ️ FAQ"
BTN_NEW = "\U0001F501 New calculation"
BTN_EXIT = "❌ Exit"
BTN_RATE = "\U0001F4B1 Exchange rate"

BTN_FUEL = "Fuel"
BTN_HYBRID = "Hybrid"
BTN_ELECTRIC = "Electric"
BTN_SEDAN = "Sedan"
BTN_SUV = "SUV"
BTN_OTHER = "Other"

# Flow length: maker, year, model, spec, fuel, utility, engine, freight, insurance
CALC_TOTAL_STEPS = 9
# Electric cars skip utility type and engine capacity
CALC_ELECTRIC_STEPS = CALC_TOTAL_STEPS - 2

# Prompts
PROMPT_MAKER = "Select the car maker:"
PROMPT_YEAR = "Select the manufacturing year:"
PROMPT_MODEL = "Select the model:"
PROMPT_SPEC = "Select the specification:"
PROMPT_FUEL = "Fuel type?"
PROMPT_UTILITY = "Vehicle utility type?"
PROMPT_ENGINE_CAPACITY = "Engine capacity (cc):"
HINT_ENGINE_CAPACITY = "e.g. 1800"
HINT_AMOUNT_USD = "Amount in USD, e.g. 1200"
PROMPT_FREIGHT = "Freight cost (USD):"
PROMPT_INSURANCE = "Insurance cost (USD):"

# Errors
ERROR_SELECT_FROM_KEYBOARD = "Please choose one of the options on the keyboard."
ERROR_ENGINE_CAPACITY = "Please enter a valid engine capacity for Fuel/Hybrid cars."
ERROR_FREIGHT = "Please enter a valid freight cost."
ERROR_INSURANCE = "Please enter a valid insurance cost."
ERROR_NO_OPTIONS = "No options are available for this selection."
ERROR_PRICE_NOT_FOUND = "No reference price was found for this vehicle."
ERROR_CATALOG = "⚠️ Could not load vehicle data: {error}"
ERROR_CALCULATION = "⚠️ Calculation error: {error}"

# Messages
WELCOME_TEXT = (
    "\U0001F44B Hi! I estimate import taxes and the total landed cost of a car.\n"
    "Press \"{calc}\" to start.".format(calc=BTN_CALC)
)
EXIT_TEXT = "Bye! Send /start to come back."
CANCEL_TEXT = "Calculation cancelled."
NOTHING_TO_CANCEL_TEXT = "There is no calculation in progress."
RATE_TEXT = "\U0001F4B1 {line}\nRate date: {day}"
FALLBACK_UNKNOWN = "I did not understand that. Please use the menu below."
MSG_REFERENCE_PRICE = "\U0001F4B5 Value as new: {price}"

RATE_STATUS_LABELS = {
    "live": "(Live)",
    "cached": "(Cached Today)",
    "fallback": "(Using Older Cache)",
    "default": "(Using Default)",
}

__all__ = [
    "BTN_CALC",
    "BTN_BACK",
    "BTN_MAIN_MENU",
    "BTN_FAQ",
    "BTN_NEW",
    "BTN_EXIT",
    "BTN_RATE",
    "BTN_FUEL",
    "BTN_HYBRID",
    "BTN_ELECTRIC",
    "BTN_SEDAN",
    "BTN_SUV",
    "BTN_OTHER",
    "CALC_TOTAL_STEPS",
    "CALC_ELECTRIC_STEPS",
    "PROMPT_MAKER",
    "PROMPT_YEAR",
    "PROMPT_MODEL",
    "PROMPT_SPEC",
    "PROMPT_FUEL",
    "PROMPT_UTILITY",
    "PROMPT_ENGINE_CAPACITY",
    "PROMPT_FREIGHT",
    "PROMPT_INSURANCE",
    "HINT_ENGINE_CAPACITY",
    "HINT_AMOUNT_USD",
    "ERROR_SELECT_FROM_KEYBOARD",
    "ERROR_ENGINE_CAPACITY",
    "ERROR_FREIGHT",
    "ERROR_INSURANCE",
    "ERROR_NO_OPTIONS",
    "ERROR_PRICE_NOT_FOUND",
    "ERROR_CATALOG",
    "ERROR_CALCULATION",
    "WELCOME_TEXT",
    "EXIT_TEXT",
    "CANCEL_TEXT",
    "NOTHING_TO_CANCEL_TEXT",
    "RATE_TEXT",
    "FALLBACK_UNKNOWN",
    "MSG_REFERENCE_PRICE",
    "RATE_STATUS_LABELS",
]
