"""
Default spending category table.

Order matters: when two categories reach the same confidence the one listed
first wins, so entries must stay in this order.
"""
from typing import Dict, Tuple

from billwise.models import CategoryRule

OTHER_CATEGORY = "Other"

DEFAULT_CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule(
        category="Internet/Telecom",
        keywords=(
            "internet", "phone", "mobile", "wireless", "telecom", "broadband", "fiber",
            "verizon", "att", "at&t", "sprint", "tmobile", "t-mobile", "comcast", "xfinity",
            "spectrum", "cox", "frontier", "centurylink", "optimum", "charter",
        ),
        base_confidence=0.9,
        subcategories=("Internet Service", "Mobile Phone", "Landline", "Cable TV"),
    ),
    CategoryRule(
        category="Utilities",
        keywords=(
            "electric", "electricity", "gas", "natural gas", "water", "sewer", "utility",
            "power", "energy", "pge", "pg&e", "edison", "sdge", "duke energy", "pepco",
            "trash", "waste", "garbage", "recycling", "solar",
        ),
        base_confidence=0.95,
        subcategories=("Electricity", "Gas", "Water/Sewer", "Waste Management", "Solar"),
    ),
    CategoryRule(
        category="Software/SaaS",
        keywords=(
            "software", "subscription", "license", "saas", "cloud", "app", "service",
            "microsoft", "office 365", "adobe", "google workspace", "slack", "zoom",
            "salesforce", "hubspot", "mailchimp", "shopify", "quickbooks", "dropbox",
            "netflix", "spotify", "github", "aws", "azure", "digital ocean",
        ),
        base_confidence=0.85,
        subcategories=(
            "Productivity Software", "Design Software", "Communication",
            "Cloud Storage", "Development Tools",
        ),
    ),
    CategoryRule(
        category="Office Supplies",
        keywords=(
            "office", "supplies", "stationary", "paper", "printer", "toner", "ink",
            "staples", "office depot", "best buy", "amazon business", "costco business",
            "furniture", "desk", "chair", "equipment", "electronics",
        ),
        base_confidence=0.8,
        subcategories=("Stationery", "Printer Supplies", "Furniture", "Electronics", "General Supplies"),
    ),
    CategoryRule(
        category="Professional Services",
        keywords=(
            "consulting", "consultant", "legal", "lawyer", "attorney", "accounting",
            "accountant", "cpa", "tax", "audit", "financial", "advisor", "professional",
            "service", "freelancer", "contractor", "marketing agency", "design agency",
        ),
        base_confidence=0.9,
        subcategories=(
            "Legal Services", "Accounting/Tax", "Consulting",
            "Marketing Services", "Design Services",
        ),
    ),
    CategoryRule(
        category="Travel & Transport",
        keywords=(
            "travel", "flight", "airline", "hotel", "airbnb", "uber", "lyft", "taxi",
            "rental", "car rental", "train", "bus", "parking", "toll", "gas station",
            "fuel", "mileage", "conference", "business trip", "expedia", "booking.com",
        ),
        base_confidence=0.85,
        subcategories=("Flights", "Hotels", "Ground Transport", "Car Rental", "Fuel", "Parking"),
    ),
    CategoryRule(
        category="Meals & Entertainment",
        keywords=(
            "restaurant", "food", "meal", "lunch", "dinner", "breakfast", "catering",
            "coffee", "starbucks", "cafe", "bar", "entertainment", "client dinner",
            "business meal", "conference meal", "uber eats", "doordash", "grubhub",
        ),
        base_confidence=0.8,
        subcategories=(
            "Business Meals", "Client Entertainment",
            "Conference/Event Meals", "Office Catering",
        ),
    ),
    CategoryRule(
        category="Marketing/Advertising",
        keywords=(
            "marketing", "advertising", "ads", "advertisement", "promotion", "campaign",
            "facebook ads", "google ads", "adwords", "linkedin ads", "twitter ads",
            "instagram ads", "youtube ads", "social media", "seo", "sem", "ppc",
            "content marketing", "email marketing", "influencer",
        ),
        base_confidence=0.9,
        subcategories=(
            "Digital Advertising", "Social Media Marketing", "Content Marketing",
            "SEO/SEM", "Print Advertising",
        ),
    ),
    CategoryRule(
        category="Insurance",
        keywords=(
            "insurance", "policy", "premium", "coverage", "liability", "health insurance",
            "business insurance", "professional liability", "workers comp", "property insurance",
            "auto insurance", "commercial insurance", "allstate", "geico", "progressive",
            "state farm", "farmers", "nationwide",
        ),
        base_confidence=0.95,
        subcategories=(
            "Health Insurance", "Business Insurance", "Professional Liability",
            "Property Insurance", "Auto Insurance",
        ),
    ),
    CategoryRule(
        category="Training & Education",
        keywords=(
            "training", "course", "education", "certification", "workshop", "seminar",
            "conference", "online course", "udemy", "coursera", "linkedin learning",
            "skillshare", "masterclass", "book", "ebook", "subscription", "learning",
        ),
        base_confidence=0.8,
        subcategories=("Online Courses", "Conferences", "Certifications", "Books/Resources", "Workshops"),
    ),
)

CATEGORY_TAGS: Dict[str, Tuple[str, ...]] = {
    "Internet/Telecom": ("communication", "infrastructure"),
    "Utilities": ("overhead", "facilities"),
    "Software/SaaS": ("tools", "productivity"),
    "Office Supplies": ("equipment", "supplies"),
    "Professional Services": ("consulting", "expertise"),
    "Travel & Transport": ("business-travel", "transportation"),
    "Meals & Entertainment": ("client-relations", "networking"),
    "Marketing/Advertising": ("growth", "customer-acquisition"),
    "Insurance": ("protection", "compliance"),
    "Training & Education": ("development", "skills"),
}
