"""Thank-you / goodbye pool."""

CLOSING_TEMPLATES: tuple[str, ...] = (
    "You're welcome! Feel free to ask if you have more questions about PEPPER.",
    "Happy to help! Come back anytime you need info on Peppercoin.",
    "Anytime! The PEPPER community is here for you.",
    "Glad I could help! Good luck with your PEPPER journey.",
    "No problem! Reach out if you need anything else.",
)
