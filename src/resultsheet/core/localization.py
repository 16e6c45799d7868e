from typing import Dict, Tuple

BENGALI_DIGITS = "০১২৩৪৫৬৭৮৯"

_DIGIT_TABLE = str.maketrans("0123456789", BENGALI_DIGITS)

# exam type key -> (Bengali label, English label)
EXAM_TYPES: Dict[str, Tuple[str, str]] = {
    "half_yearly": ("অর্ধবার্ষিক পরীক্ষা", "Half Yearly Examination"),
    "annual": ("বার্ষিক পরীক্ষা", "Annual Examination"),
    "test": ("টেস্ট পরীক্ষা", "Test Examination"),
    "first_term": ("প্রথম সাময়িক", "First Terminal"),
    "second_term": ("দ্বিতীয় সাময়িক", "Second Terminal"),
    "third_term": ("তৃতীয় সাময়িক", "Third Terminal"),
    "final": ("চূড়ান্ত পরীক্ষা", "Final Examination"),
}


def to_bengali_digits(value: object) -> str:
    return str(value).translate(_DIGIT_TABLE)


def exam_label(exam_type: str, *, bengali: bool = True) -> str:
    label_bn, label_en = EXAM_TYPES[exam_type]
    return label_bn if bengali else label_en
