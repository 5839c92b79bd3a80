"""Domain constants for default ledger data."""

# (name, type, icon, color)
PERSONAL_CATEGORIES = (
    ("Salary", "income", "Wallet", "#6366f1"),
    ("Freelance", "income", "Briefcase", "#818cf8"),
    ("Investments", "income", "TrendUp", "#a5b4fc"),
    ("Rental Income", "income", "House", "#c7d2fe"),
    ("Gifts", "income", "Gift", "#4f46e5"),
    ("Other Income", "income", "Plus", "#4f46e5"),
    ("Food & Dining", "expense", "ForkKnife", "#8b7355"),
    ("Groceries", "expense", "ShoppingBag", "#a08060"),
    ("Transportation", "expense", "Car", "#b58d6b"),
    ("Shopping", "expense", "ShoppingCart", "#ca9a82"),
    ("Entertainment", "expense", "GameController", "#d4b896"),
    ("Bills & Utilities", "expense", "Lightning", "#705845"),
    ("Healthcare", "expense", "FirstAid", "#9f8270"),
    ("Personal Care", "expense", "Heart", "#8b7355"),
    ("Education", "expense", "GraduationCap", "#ca9a82"),
    ("Travel", "expense", "Airplane", "#705845"),
    ("Subscriptions", "expense", "Repeat", "#5c4a3d"),
    ("Insurance", "expense", "Shield", "#d4b896"),
    ("Other Expenses", "expense", "DotsThree", "#5c4a3d"),
)

BUSINESS_CATEGORIES = (
    ("Client Payments", "income", "CurrencyCircleDollar", "#6366f1"),
    ("Project Revenue", "income", "Briefcase", "#818cf8"),
    ("Consulting", "income", "UserCircle", "#a5b4fc"),
    ("Retainer Income", "income", "Repeat", "#c7d2fe"),
    ("Product Sales", "income", "Package", "#4f46e5"),
    ("Other Revenue", "income", "Plus", "#4f46e5"),
    ("Office Supplies", "expense", "Notebook", "#8b7355"),
    ("Software & Tools", "expense", "Code", "#a08060"),
    ("Marketing", "expense", "Megaphone", "#b58d6b"),
    ("Professional Services", "expense", "UserCircle", "#ca9a82"),
    ("Travel & Meals", "expense", "Airplane", "#d4b896"),
    ("Equipment", "expense", "Desktop", "#705845"),
    ("Rent & Utilities", "expense", "House", "#9f8270"),
    ("Insurance", "expense", "Shield", "#8b7355"),
    ("Taxes", "expense", "Receipt", "#ca9a82"),
    ("Bank Fees", "expense", "Bank", "#705845"),
    ("Contractors", "expense", "Users", "#5c4a3d"),
    ("Training", "expense", "GraduationCap", "#d4b896"),
    ("Subscriptions", "expense", "Repeat", "#5c4a3d"),
    ("Other Expenses", "expense", "DotsThree", "#5c4a3d"),
)

PERSONAL_USE_CASES = ("personal",)
BUSINESS_USE_CASES = ("freelancer", "small_business", "agency")


__all__ = [
    "PERSONAL_CATEGORIES",
    "BUSINESS_CATEGORIES",
    "PERSONAL_USE_CASES",
    "BUSINESS_USE_CASES",
]
