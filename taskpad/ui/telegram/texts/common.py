WELCOME = (
    "Tasks and notes, your way.\n"
    "Use the menu below or /tasks, /notes, /new_task, /new_note, /search."
)
MENU = "Choose an action."
CANCELLED = "Cancelled."
NOT_AUTHORIZED = "You are not allowed to use this bot."
ENTER_VALUE = "Send the new {label}. Send '-' to clear it."
ENTER_DUE_DATE = "Send the due date as YYYY-MM-DD. Send '-' to clear it."
CHOOSE_VALUE = "Choose {label}:"
