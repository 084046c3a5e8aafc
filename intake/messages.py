"""
Reply texts sent to CHWs.

WhatsApp renders *text* as bold.
"""

CANCEL_COMMAND = "cancel"

MENU_TEXT = (
    "*Main Menu*\n"
    "1. Register guardian\n"
    "2. Register baby\n"
    "3. Create appointment\n"
    "4. Modify or cancel appointment\n"
    "\n"
    "Reply with a number. Type *cancel* at any time to stop."
)

INTRO_TEXT = (
    "Hello! This is the immunization intake assistant for Community Health Workers."
)

ACCESS_DENIED = (
    "Access denied. This number is not authorized to use this service. "
    "Please contact your supervisor."
)

CANCELLED = "Cancelled. Nothing was saved."
NOTHING_TO_CANCEL = "There is nothing to cancel."
RESTARTING = "Okay, let's start over."
UNEXPECTED_ERROR = (
    "Sorry, something went wrong while handling your message. "
    "Please start again from the menu.\n\n" + MENU_TEXT
)

CONFIRM_HINT = "Reply *Y* to submit or *N* to start over."
CONFIRM_REPROMPT = "Please reply *Y* to submit or *N* to start over."

SUBMISSION_FAILED = (
    "❌ The server rejected the request: {error}\n\n"
    "Nothing was saved. Choose an option to try again.\n\n" + MENU_TEXT
)
LOOKUP_FAILED = (
    "❌ Could not reach the server: {error}\n\n"
    "Please try again later.\n\n" + MENU_TEXT
)

# ----------------------------------------------------------------------------
# Shared field prompts
# ----------------------------------------------------------------------------

INVALID_NATIONAL_ID = "That does not look like a national ID. Enter digits only (at least 5)."
INVALID_GENDER = "Please reply *M* for male or *F* for female."
INVALID_DATE = "Invalid date. Use the format YYYY-MM-DD, for example 2025-03-14."
INVALID_NUMERIC_ID = "Please enter the numeric ID, digits only."
EMPTY_TEXT = "This field cannot be empty. Please type a value."

# ----------------------------------------------------------------------------
# Register guardian
# ----------------------------------------------------------------------------

ASK_GUARDIAN_NAME = "*Register guardian*\nEnter the guardian's full name."
ASK_GUARDIAN_NATIONAL_ID = "Enter the guardian's national ID number."
ASK_GUARDIAN_GENDER = "Guardian's gender? Reply *M* or *F*."
ASK_GUARDIAN_WHATSAPP = "Enter the guardian's WhatsApp number (e.g. 0712345678)."
INVALID_WHATSAPP = (
    "Invalid Kenyan mobile number. Use 07XXXXXXXX, 01XXXXXXXX or 2547XXXXXXXX."
)
ASK_NEAREST_CLINIC = "Enter the guardian's nearest clinic."
ASK_RESIDENCE = "Enter the guardian's residence location (village/estate)."
GUARDIAN_REGISTERED = "✅ Guardian registered successfully."

# ----------------------------------------------------------------------------
# Register baby
# ----------------------------------------------------------------------------

ASK_PARENT_NATIONAL_ID = "*Register baby*\nEnter the parent/guardian's national ID number."
GUARDIAN_NOT_FOUND = (
    "No guardian found with national ID {national_id}. "
    "Please register the guardian first (option 1).\n\n" + MENU_TEXT
)
GUARDIAN_FOUND = "Guardian found: {name}."
ASK_BABY_FIRST_NAME = "Enter the baby's first name."
ASK_BABY_LAST_NAME = "Enter the baby's last name."
ASK_BABY_GENDER = "Baby's gender? Reply *M* or *F*."
ASK_BABY_DOB = "Enter the baby's date of birth (YYYY-MM-DD)."
DOB_IN_FUTURE = "The date of birth cannot be in the future. Enter it as YYYY-MM-DD."
ASK_NATIONALITY = "Enter the baby's nationality."
BABY_REGISTERED = "✅ Baby registered successfully. The immunization schedule will be generated."

# ----------------------------------------------------------------------------
# Create appointment
# ----------------------------------------------------------------------------

ASK_APPOINTMENT_BABY_ID = "*Create appointment*\nEnter the baby's ID."
ASK_APPOINTMENT_DATE = "Enter the appointment date (YYYY-MM-DD)."
ASK_APPOINTMENT_NOTES = "Enter the purpose of the appointment (e.g. BCG vaccine)."
APPOINTMENT_CREATED = "✅ Appointment created successfully."

# ----------------------------------------------------------------------------
# Modify / cancel appointment
# ----------------------------------------------------------------------------

ASK_CHANGE_BABY_ID = "*Modify or cancel appointment*\nEnter the baby's ID."
NO_APPOINTMENTS = "No appointments found for baby {baby_id}.\n\n" + MENU_TEXT
SELECT_APPOINTMENT = "Appointments for baby {baby_id}:\n{listing}\n\nReply with the appointment number."
INVALID_SELECTION = "Please reply with a number between 1 and {count}."
ASK_ACTION = "What would you like to do?\n1. Reschedule\n2. Cancel the appointment"
INVALID_ACTION = "Please reply *1* to reschedule or *2* to cancel the appointment."
ASK_NEW_DATE = (
    "Enter the new date and an optional note separated by a comma, "
    "e.g. 2025-03-14, Mother travelling"
)
DEFAULT_RESCHEDULE_NOTE = "Rescheduled via WhatsApp"
CONFIRM_DELETE = "Type *yes* to confirm cancelling this appointment."
APPOINTMENT_UPDATED = "✅ Appointment rescheduled."
APPOINTMENT_DELETED = "✅ Appointment cancelled."
