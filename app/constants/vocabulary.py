"""對話抽取用的固定詞彙表"""

# 廠牌詞彙（key 為對話中的寫法，value 為正規化後的廠牌）
VEHICLE_MAKES = {
    "toyota": "toyota",
    "honda": "honda",
    "ford": "ford",
    "chevy": "chevrolet",
    "chevrolet": "chevrolet",
    "tesla": "tesla",
    "bmw": "bmw",
    "mercedes-benz": "mercedes",
    "mercedes": "mercedes",
    "nissan": "nissan",
    "mazda": "mazda",
    "hyundai": "hyundai",
    "kia": "kia",
    "volkswagen": "volkswagen",
    "vw": "volkswagen",
    "audi": "audi",
    "lexus": "lexus",
    "subaru": "subaru",
    "jeep": "jeep",
    "dodge": "dodge",
    "gmc": "gmc",
    "acura": "acura",
    "infiniti": "infiniti",
    "volvo": "volvo",
    "porsche": "porsche",
    "cadillac": "cadillac",
    "buick": "buick",
    "lincoln": "lincoln",
    "chrysler": "chrysler",
    "mitsubishi": "mitsubishi",
}

# 緊接在廠牌後面但不是車型的字
MODEL_STOPWORDS = {
    "a", "an", "and", "are", "as", "at", "but", "car", "for", "from", "i", "in", "is",
    "it", "my", "of", "on", "or", "that", "the", "to", "truck", "vehicle", "was",
    "which", "with",
}

CARRIERS = [
    "state farm",
    "geico",
    "progressive",
    "allstate",
    "usaa",
    "liberty mutual",
    "farmers",
    "nationwide",
    "american family",
    "travelers",
]

NUMBER_WORDS = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}

PARKING_KEYWORDS = [
    ("garage", r"\bgarage[ds]?\b"),
    ("driveway", r"\bdriveway\b"),
    ("street", r"\b(?:on the street|street parking|parks? on the street)\b"),
    ("parking-lot", r"\bparking lot\b"),
]

USE_KEYWORDS = [
    ("commute", r"\bcommut\w*|\b(?:to|for) work\b"),
    ("pleasure", r"\bpleasure\b|\bpersonal use\b|\bweekends?\b"),
    ("business", r"\bbusiness\b"),
]

MARITAL_KEYWORDS = [
    ("single", r"\bnot married\b|\bsingle\b"),
    ("married", r"\bmarried\b"),
    ("divorced", r"\bdivorced\b"),
    ("widowed", r"\bwidow(?:ed|er)?\b"),
]

CLEAN_RECORD_PATTERN = (
    r"\bclean (?:driving )?record\b|\bno (?:accidents?|tickets?|violations?|claims?)\b"
    r"|\bnever had an? (?:accident|ticket)\b"
)

VIOLATION_PATTERN = (
    r"\b(speeding tickets?|dui|dwi|at-fault accidents?|accidents?|tickets?|violations?|speeding)\b"
)

COVERAGE_TIER_KEYWORDS = [
    ("minimum", r"\bminimum\b|\bbasic\b|\bliability only\b|\bcheapest\b"),
    ("full", r"\bfull coverage\b|\bcomprehensive\b"),
    ("standard", r"\bstandard (?:coverage|policy|plan)\b"),
]

RIDER_KEYWORDS = {
    "roadside_assistance": r"\broadside\b|\btowing\b",
    "rental_reimbursement": r"\brental (?:car|reimbursement|coverage)\b",
    "gap_insurance": r"\bgap (?:insurance|coverage)\b",
}

NEGATION_PATTERN = r"\b(?:no|not|don'?t need|do not need|without|skip)\b"
