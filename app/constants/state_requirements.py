"""
州法最低投保額與業界建議常數

資料來源為各州保險主管機關公告（諮詢用途，不保證為最新法規）。
金額單位皆為美元；責任險簡寫格式為「每人體傷 / 每事故體傷 / 財損」（千元）。
"""

# (州名, 每人體傷, 每事故體傷, 財損, PIP 強制, UM/UIM 強制, 來源)
_STATE_ROWS = {
    "AK": ("Alaska", 50000, 100000, 25000, False, False, "Alaska Division of Insurance"),
    "AL": ("Alabama", 25000, 50000, 25000, False, False, "Alabama Department of Insurance"),
    "AR": ("Arkansas", 25000, 50000, 25000, False, False, "Arkansas Insurance Department"),
    "AZ": ("Arizona", 25000, 50000, 15000, False, False, "Arizona Department of Insurance"),
    "CA": ("California", 15000, 30000, 5000, False, False, "California Department of Insurance"),
    "CO": ("Colorado", 25000, 50000, 15000, False, False, "Colorado Division of Insurance"),
    "CT": ("Connecticut", 25000, 50000, 25000, False, True, "Connecticut Insurance Department"),
    "DC": ("District of Columbia", 25000, 50000, 10000, False, True,
           "DC Department of Insurance, Securities and Banking"),
    "DE": ("Delaware", 25000, 50000, 10000, True, False, "Delaware Department of Insurance"),
    "FL": ("Florida", 10000, 20000, 10000, True, False, "Florida Department of Financial Services"),
    "GA": ("Georgia", 25000, 50000, 25000, False, False, "Georgia Department of Insurance"),
    "HI": ("Hawaii", 20000, 40000, 10000, True, False,
           "Hawaii Department of Commerce and Consumer Affairs"),
    "IA": ("Iowa", 20000, 40000, 15000, False, False, "Iowa Insurance Division"),
    "ID": ("Idaho", 25000, 50000, 15000, False, False, "Idaho Department of Insurance"),
    "IL": ("Illinois", 25000, 50000, 20000, False, True, "Illinois Department of Insurance"),
    "IN": ("Indiana", 25000, 50000, 25000, False, False, "Indiana Department of Insurance"),
    "KS": ("Kansas", 25000, 50000, 25000, True, True, "Kansas Insurance Department"),
    "KY": ("Kentucky", 25000, 50000, 25000, True, False, "Kentucky Department of Insurance"),
    "LA": ("Louisiana", 15000, 30000, 25000, False, False, "Louisiana Department of Insurance"),
    "MA": ("Massachusetts", 20000, 40000, 5000, True, True, "Massachusetts Division of Insurance"),
    "MD": ("Maryland", 30000, 60000, 15000, True, True, "Maryland Insurance Administration"),
    "ME": ("Maine", 50000, 100000, 25000, False, True, "Maine Bureau of Insurance"),
    "MI": ("Michigan", 50000, 100000, 10000, True, False,
           "Michigan Department of Insurance and Financial Services"),
    "MN": ("Minnesota", 30000, 60000, 10000, True, True, "Minnesota Department of Commerce"),
    "MO": ("Missouri", 25000, 50000, 25000, False, True, "Missouri Department of Insurance"),
    "MS": ("Mississippi", 25000, 50000, 25000, False, False, "Mississippi Insurance Department"),
    "MT": ("Montana", 25000, 50000, 20000, False, False,
           "Montana State Auditor - Insurance Commissioner"),
    "NC": ("North Carolina", 30000, 60000, 25000, False, True,
           "North Carolina Department of Insurance"),
    "ND": ("North Dakota", 25000, 50000, 25000, True, True, "North Dakota Insurance Department"),
    "NE": ("Nebraska", 25000, 50000, 25000, False, True, "Nebraska Department of Insurance"),
    "NH": ("New Hampshire", 25000, 50000, 25000, False, False, "New Hampshire Insurance Department"),
    "NJ": ("New Jersey", 15000, 30000, 5000, True, True,
           "New Jersey Department of Banking and Insurance"),
    "NM": ("New Mexico", 25000, 50000, 10000, False, False,
           "New Mexico Office of Superintendent of Insurance"),
    "NV": ("Nevada", 25000, 50000, 20000, False, False, "Nevada Division of Insurance"),
    "NY": ("New York", 25000, 50000, 10000, True, True,
           "New York State Department of Financial Services"),
    "OH": ("Ohio", 25000, 50000, 25000, False, False, "Ohio Department of Insurance"),
    "OK": ("Oklahoma", 25000, 50000, 25000, False, False, "Oklahoma Insurance Department"),
    "OR": ("Oregon", 25000, 50000, 20000, True, True, "Oregon Division of Financial Regulation"),
    "PA": ("Pennsylvania", 15000, 30000, 5000, True, False, "Pennsylvania Insurance Department"),
    "RI": ("Rhode Island", 25000, 50000, 25000, False, False,
           "Rhode Island Department of Business Regulation"),
    "SC": ("South Carolina", 25000, 50000, 25000, False, True,
           "South Carolina Department of Insurance"),
    "SD": ("South Dakota", 25000, 50000, 25000, False, True, "South Dakota Division of Insurance"),
    "TN": ("Tennessee", 25000, 50000, 15000, False, False,
           "Tennessee Department of Commerce and Insurance"),
    "TX": ("Texas", 30000, 60000, 25000, False, False, "Texas Department of Insurance"),
    "UT": ("Utah", 25000, 65000, 15000, True, False, "Utah Insurance Department"),
    "VA": ("Virginia", 25000, 50000, 20000, False, False, "Virginia State Corporation Commission"),
    "VT": ("Vermont", 25000, 50000, 10000, False, True, "Vermont Department of Financial Regulation"),
    "WA": ("Washington", 25000, 50000, 10000, False, False,
           "Washington State Office of the Insurance Commissioner"),
    "WI": ("Wisconsin", 25000, 50000, 10000, False, True,
           "Wisconsin Office of the Commissioner of Insurance"),
    "WV": ("West Virginia", 25000, 50000, 25000, False, True,
           "West Virginia Offices of the Insurance Commissioner"),
    "WY": ("Wyoming", 25000, 50000, 20000, False, False, "Wyoming Department of Insurance"),
}

_NO_FAULT_PIP = "No-fault state with required PIP coverage."
_NO_FAULT_PIP_UM = "No-fault state with required PIP and UM coverage."
_NO_FAULT_PIP_MANDATORY = "No-fault state. PIP is mandatory."

STATE_NOTES = {
    "AK": "Alaska has higher minimums due to remote locations and higher costs.",
    "CA": "California has relatively low minimums. Consider higher limits.",
    "DE": _NO_FAULT_PIP,
    "FL": "PIP (Personal Injury Protection) is required in Florida. No-fault state.",
    "HI": _NO_FAULT_PIP_MANDATORY,
    "KS": _NO_FAULT_PIP_UM,
    "KY": _NO_FAULT_PIP_MANDATORY,
    "MA": _NO_FAULT_PIP_UM,
    "ME": "Maine has higher minimums and requires both UM and UIM coverage.",
    "MI": "Michigan has unique no-fault system with unlimited PIP (can opt out).",
    "MN": _NO_FAULT_PIP_UM,
    "ND": _NO_FAULT_PIP_UM,
    "NH": "NH does not require insurance, but drivers must prove financial "
          "responsibility if involved in an accident.",
    "NJ": "No-fault state. Can choose between standard and basic policies.",
    "NY": "NY requires PIP and UM/UIM coverage. No-fault state.",
    "PA": "Choice no-fault state. Can opt for tort or no-fault.",
    "UT": _NO_FAULT_PIP,
    "VA": "Virginia allows drivers to pay $500 uninsured motorist fee instead of insurance.",
}

STATE_MINIMUMS = {
    code: {
        "state": code,
        "state_name": name,
        "liability": {
            "bodily_injury_per_person": bi_person,
            "bodily_injury_per_accident": bi_accident,
            "property_damage": pd,
        },
        "pip_required": pip,
        "um_required": um,
        "notes": STATE_NOTES.get(code),
        "source": source,
    }
    for code, (name, bi_person, bi_accident, pd, pip, um, source) in _STATE_ROWS.items()
}

INDUSTRY_RECOMMENDATIONS = {
    "liability": {
        "bodily_injury_per_person": 100000,
        "bodily_injury_per_accident": 300000,
        "property_damage": 100000,
        "reasoning": "Protects your assets in case of a serious accident. Medical costs "
                     "and lawsuits can easily exceed state minimums.",
        "source": "Consumer Reports (2024)",
        "cost_increase": "$15-30/month over state minimums",
        "annual_cost_estimate": 270,
    },
    "uninsured_motorist": {
        "reasoning": "13% of US drivers are uninsured (1 in 8). UM/UIM protects you if hit "
                     "by an uninsured or underinsured driver.",
        "source": "Insurance Information Institute (2023)",
        "cost_increase": "$5-15/month",
        "annual_cost_estimate": 120,
    },
    "deductibles": {
        "collision": 500,
        "comprehensive": 500,
        "reasoning": "Balance between premium savings and out-of-pocket costs. $500 is the "
                     "sweet spot for most drivers.",
        "source": "Industry standard",
    },
    "umbrella": {
        "recommended_coverage": 1000000,
        "reasoning": "Homeowners carry assets a serious lawsuit can reach. Umbrella insurance "
                     "protects assets beyond auto and home liability limits.",
        "source": "Financial advisors consensus",
        "cost_increase": "$150-300/year for $1M coverage",
        "annual_cost_estimate": 225,
    },
    "vehicle_value": {
        "drop_collision_comprehensive": 5000,
        "new_vehicle_price": 40000,
        "estimated_drop_savings": 450,
        "reasoning": "If vehicle value is below $5,000, collision/comprehensive may not be "
                     "cost-effective. Rule of thumb: Drop if annual premium exceeds 10% of "
                     "vehicle value.",
        "source": "Insurance Information Institute",
    },
    "savings": {
        "rate": 0.20,
        "source": "Industry average savings from comparison shopping",
    },
}

# 環境風險分數（0~1）觸發門檻
RISK_THRESHOLDS = {
    "earthquake": 0.8,
    "wildfire": 0.7,
    "flood": 0.6,
    "crime": 0.7,
}

LIFE_STAGE_THRESHOLDS = {
    "young_driver_age": 25,
    "high_value_home": 500000,
    "liability_floor": 250000,
}
