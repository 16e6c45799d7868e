import unittest

from resultsheet.core.gpa import grade_subjects, overall_grade
from resultsheet.models.entities import COMPULSORY, FOURTH_SUBJECT, OPTIONAL, Subject


def _subject(subject_id, obtained, category=COMPULSORY, full=100, pass_marks=33):
    return Subject(
        id=subject_id,
        name=subject_id.title(),
        full_marks=full,
        pass_marks=pass_marks,
        obtained_marks=obtained,
        category=category,
    )


class OverallGradeTests(unittest.TestCase):
    def test_weak_fourth_subject_excluded(self):
        subjects = [
            _subject("bangla", 100),
            _subject("english", 100),
            _subject("ict", 20, FOURTH_SUBJECT, pass_marks=10),
        ]
        result = overall_grade(subjects)
        self.assertEqual(result.included_count, 2)
        self.assertEqual(result.average_point, 5.0)
        self.assertEqual(result.grade_point, 5.0)
        self.assertEqual(result.letter_grade, "A+")

    def test_fourth_subject_below_pass_marks_still_fails(self):
        subjects = [
            _subject("bangla", 100),
            _subject("english", 100),
            _subject("ict", 20, FOURTH_SUBJECT),
        ]
        result = overall_grade(subjects)
        self.assertEqual(result.included_count, 2)
        self.assertEqual(result.average_point, 5.0)
        self.assertEqual(result.average_grade.letter_grade, "A+")
        self.assertEqual(result.grade_point, 0.0)
        self.assertEqual(result.letter_grade, "F")
        self.assertEqual([s.id for s in result.failing_subjects], ["ict"])

    def test_passing_fourth_subject_included(self):
        subjects = [
            _subject("bangla", 100),
            _subject("english", 100),
            _subject("ict", 90, FOURTH_SUBJECT),
        ]
        result = overall_grade(subjects)
        self.assertEqual(result.included_count, 3)
        self.assertEqual(result.average_point, 5.0)

    def test_fourth_subject_at_threshold_counts(self):
        subjects = [_subject("bangla", 100), _subject("agri", 40, FOURTH_SUBJECT)]
        result = overall_grade(subjects)
        self.assertEqual(result.included_count, 2)
        self.assertEqual(result.average_point, 3.5)

    def test_optional_subject_always_counts(self):
        subjects = [_subject("bangla", 100), _subject("music", 35, OPTIONAL)]
        result = overall_grade(subjects)
        self.assertEqual(result.included_count, 2)
        self.assertEqual(result.average_point, 3.0)

    def test_failing_subject_overrides_result(self):
        subjects = [
            _subject("bangla", 20),
            _subject("english", 95),
            _subject("math", 95),
        ]
        result = overall_grade(subjects)
        self.assertEqual(result.grade_point, 0.0)
        self.assertEqual(result.letter_grade, "F")
        self.assertEqual([s.id for s in result.failing_subjects], ["bangla"])
        self.assertGreater(result.average_point, 0)
        self.assertFalse(result.is_passed)

    def test_average_rescaled_through_bands(self):
        # (5.0 + 3.0) / 2 = 4.0 -> 80% -> A+
        result = overall_grade([_subject("bangla", 85), _subject("english", 55)])
        self.assertEqual(result.average_point, 4.0)
        self.assertEqual(result.average_grade.letter_grade, "A+")
        self.assertEqual(result.grade_point, 5.0)

        # (4.0 + 3.0) / 2 = 3.5 -> 70% -> A
        result = overall_grade([_subject("bangla", 75), _subject("english", 55)])
        self.assertEqual(result.letter_grade, "A")
        self.assertEqual(result.grade_point, 4.0)

    def test_unassessed_subjects_ignored(self):
        subjects = [
            _subject("bangla", 90),
            _subject("science", None),
        ]
        result = overall_grade(subjects)
        self.assertEqual(result.included_count, 1)
        self.assertEqual(result.failing_subjects, ())
        self.assertEqual([g.subject.id for g in result.subject_grades], ["bangla"])

    def test_empty_input(self):
        result = overall_grade([])
        self.assertEqual(result.grade_point, 0.0)
        self.assertEqual(result.letter_grade, "F")
        self.assertEqual(result.average_point, 0.0)
        self.assertEqual(result.failing_subjects, ())
        self.assertEqual(result.included_count, 0)

    def test_idempotent_and_input_untouched(self):
        subjects = [_subject("bangla", 75), _subject("ict", 10, FOURTH_SUBJECT, full=50, pass_marks=17)]
        snapshot = list(subjects)
        first = overall_grade(subjects)
        second = overall_grade(subjects)
        self.assertEqual(first, second)
        self.assertEqual(subjects, snapshot)

    def test_accepts_generator(self):
        result = overall_grade(_subject(name, 85) for name in ("bangla", "english"))
        self.assertEqual(result.included_count, 2)

    def test_zero_full_marks_raises(self):
        with self.assertRaises(ValueError):
            overall_grade([_subject("bangla", 0, full=0, pass_marks=0)])


class SubjectGradeListTests(unittest.TestCase):
    def test_flags_on_each_subject(self):
        graded = grade_subjects(
            [
                _subject("bangla", 30),
                _subject("ict", 10, FOURTH_SUBJECT, full=50, pass_marks=17),
            ]
        )
        self.assertTrue(graded[0].failed)
        self.assertTrue(graded[0].included)
        self.assertAlmostEqual(graded[1].percentage, 20.0)
        self.assertFalse(graded[1].included)


if __name__ == "__main__":
    unittest.main()
