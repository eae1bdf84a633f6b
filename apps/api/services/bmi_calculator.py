"""
Body Metrics Service

Derived profile facts used by the fitness evaluator:
    BMI = weight_kg / (height_m)²
    age = whole years since date of birth
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union


def calculate_bmi(
    weight_kg: Optional[Union[Decimal, float]],
    height_cm: Optional[Union[Decimal, float]],
) -> Optional[Decimal]:
    """
    Calculate BMI from weight (kg) and height (cm).
    
    Returns:
        BMI rounded to 1 decimal place, or None if either input is
        missing or not positive.
        
    Examples:
        >>> calculate_bmi(Decimal('75'), Decimal('180'))
        Decimal('23.1')
        >>> calculate_bmi(70, None)
    """
    if weight_kg is None or height_cm is None:
        return None
    
    if weight_kg <= 0 or height_cm <= 0:
        return None
    
    height_m = float(height_cm) / 100.0
    bmi = float(weight_kg) / (height_m ** 2)
    
    return Decimal(str(round(bmi, 1)))


def calculate_age(date_of_birth: Optional[date], on_date: Optional[Union[date, datetime]] = None) -> Optional[int]:
    """
    Age in whole years on ``on_date`` (default: today).
    Returns None if date of birth is not available.
    """
    if not date_of_birth:
        return None
    
    if on_date is None:
        on_date = date.today()
    on = on_date.date() if isinstance(on_date, datetime) else on_date
    dob = date_of_birth.date() if isinstance(date_of_birth, datetime) else date_of_birth
    
    age = on.year - dob.year
    # Birthday hasn't happened yet this year
    if (on.month, on.day) < (dob.month, dob.day):
        age -= 1
    
    return age
