"""欄位對應的預設提問文案（外部對話層可再改寫）"""

QUESTION_TEMPLATES = {
    "number_of_drivers": "How many drivers will be on the policy?",
    "number_of_vehicles": "How many vehicles need coverage?",
    "zip_code": "What ZIP code will the vehicles be garaged in?",
    "driver_age": "How old is driver {n}?",
    "driver_experience": "How many years has driver {n} been licensed?",
    "driver_marital": "What is driver {n}'s marital status?",
    "driver_violations": "Does driver {n} have a clean driving record?",
    "vehicle_year": "What year is vehicle {n}?",
    "vehicle_make": "What make is vehicle {n}? (Toyota, Honda, Ford, etc.)",
    "vehicle_model": "What model is vehicle {n}?",
    "vehicle_mileage": "How many miles per year for vehicle {n}?",
    "vehicle_use": "Is vehicle {n} for commuting, pleasure, or business?",
    "coverage_level": "What level of coverage are you looking for?",
    "deductible_preference": "What deductible amount would you prefer?",
}
