import math
import unittest

from resultsheet.core.grades import (
    GRADE_BANDS,
    grade_for_percentage,
    subject_grade,
    subject_percentage,
)


class GradeBandTests(unittest.TestCase):
    def test_band_letters(self):
        self.assertEqual(grade_for_percentage(95).letter_grade, "A+")
        self.assertEqual(grade_for_percentage(72).letter_grade, "A")
        self.assertEqual(grade_for_percentage(65).letter_grade, "A-")
        self.assertEqual(grade_for_percentage(55).letter_grade, "B")
        self.assertEqual(grade_for_percentage(45).letter_grade, "C")
        self.assertEqual(grade_for_percentage(35).letter_grade, "D")
        self.assertEqual(grade_for_percentage(20).letter_grade, "F")

    def test_boundaries_resolve_to_higher_band(self):
        self.assertEqual(grade_for_percentage(80).grade_point, 5.0)
        self.assertEqual(grade_for_percentage(80).letter_grade, "A+")
        self.assertEqual(grade_for_percentage(79.999).grade_point, 4.0)
        self.assertEqual(grade_for_percentage(79.999).letter_grade, "A")
        self.assertEqual(grade_for_percentage(33).grade_point, 1.0)
        self.assertEqual(grade_for_percentage(33).letter_grade, "D")
        self.assertEqual(grade_for_percentage(32.999).grade_point, 0.0)
        self.assertEqual(grade_for_percentage(32.999).letter_grade, "F")

    def test_out_of_range_percentages(self):
        self.assertEqual(grade_for_percentage(-10).letter_grade, "F")
        self.assertEqual(grade_for_percentage(130).letter_grade, "A+")
        self.assertEqual(grade_for_percentage(math.nan).letter_grade, "F")

    def test_grade_points_are_monotonic(self):
        previous = -1.0
        for pct in range(-5, 106):
            point = grade_for_percentage(pct / 1.0).grade_point
            self.assertGreaterEqual(point, previous)
            previous = point

    def test_bands_ordered_highest_first(self):
        thresholds = [band[0] for band in GRADE_BANDS]
        self.assertEqual(thresholds, sorted(thresholds, reverse=True))

    def test_bengali_labels(self):
        self.assertEqual(grade_for_percentage(85).grade_bn, "এ প্লাস")
        self.assertEqual(grade_for_percentage(10).grade_bn, "অকৃতকার্য")


class SubjectGradeTests(unittest.TestCase):
    def test_subject_grade_uses_percentage(self):
        grade = subject_grade(80, 100)
        self.assertEqual((grade.grade_point, grade.letter_grade), (5.0, "A+"))

    def test_half_marks_subject(self):
        self.assertEqual(subject_grade(45, 50).letter_grade, "A+")
        self.assertEqual(subject_grade(16, 50).letter_grade, "F")

    def test_zero_full_marks_rejected(self):
        with self.assertRaises(ValueError):
            subject_percentage(10, 0)


if __name__ == "__main__":
    unittest.main()
