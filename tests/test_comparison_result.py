import copy
import itertools
import unittest

from corefeval.evaluation.comparison_result import ComparisonResult, Fraction, MetricScore


def make_result(doc_to_metrics):
    result = ComparisonResult()
    for doc_id, metrics in doc_to_metrics.items():
        for metric, (r, p) in metrics.items():
            result.add(doc_id, metric, MetricScore(Fraction(*r), Fraction(*p)))
    return result


def merged(*results):
    result = ComparisonResult()
    for r in results:
        result.merge(copy.deepcopy(r))
    return result


class TestFraction(unittest.TestCase):

    def test_value(self):
        self.assertAlmostEqual(Fraction(3, 4).value, 0.75)
        self.assertEqual(Fraction(3, 0).value, 0)

    def test_equality_is_on_the_pair(self):
        self.assertEqual(Fraction(3, 5), Fraction(3.0, 5.0))
        self.assertNotEqual(Fraction(1, 2), Fraction(2, 4))
        self.assertLess(Fraction(1, 9), Fraction(2, 4))

    def test_f1(self):
        self.assertAlmostEqual(MetricScore(Fraction(1, 2), Fraction(1, 1)).f1, 2 / 3.)
        self.assertEqual(MetricScore(Fraction(0, 2), Fraction(0, 0)).f1, 0)


class TestMerge(unittest.TestCase):

    def setUp(self):
        self.a = make_result({'doc1': {'muc': ((1, 2), (1, 1)), 'bcub': ((2, 3), (2, 2))}})
        self.b = make_result({'doc2': {'muc': ((0, 1), (0, 0))}})
        self.c = make_result({'doc3': {'ceafe': ((4, 5), (4, 4))}, 'doc4': {'muc': ((1, 1), (1, 1))}})

    def test_commutative(self):
        self.assertEqual(merged(self.a, self.b), merged(self.b, self.a))

    def test_associative(self):
        self.assertEqual(merged(merged(self.a, self.b), self.c), merged(self.a, merged(self.b, self.c)))

    def test_order_independent_count(self):
        counts = {merged(*p).score_count() for p in itertools.permutations([self.a, self.b, self.c])}
        self.assertEqual(counts, {self.a.score_count() + self.b.score_count() + self.c.score_count()})

    def test_same_document_unites_metrics(self):
        other = make_result({'doc1': {'ceafe': ((1, 1), (1, 1))}})
        result = merged(self.a, other)
        self.assertEqual(sorted(result['doc1']), ['bcub', 'ceafe', 'muc'])

    def test_colliding_metric_last_writer_wins(self):
        other = make_result({'doc1': {'muc': ((2, 2), (2, 2))}})
        self.assertEqual(merged(self.a, other)['doc1']['muc'].recall, Fraction(2, 2))
        self.assertEqual(merged(other, self.a)['doc1']['muc'].recall, Fraction(1, 2))

    def test_merge_returns_self_and_keeps_other(self):
        result = ComparisonResult()
        self.assertIs(result.merge(self.a), result)
        result.add('doc1', 'muc', MetricScore(Fraction(0, 1), Fraction(0, 1)))
        self.assertEqual(self.a['doc1']['muc'].recall, Fraction(1, 2))


class TestSummary(unittest.TestCase):

    def test_sums_fractions_over_documents(self):
        result = make_result({'doc1': {'muc': ((1, 2), (1, 1)), 'bcub': ((1, 2), (1, 2))},
                              'doc2': {'muc': ((2, 2), (2, 3)), 'ceafe': ((1, 4), (1, 2))}})
        summary = result.summary()
        self.assertEqual(summary['muc']['recall'], Fraction(3, 4))
        self.assertEqual(summary['muc']['precision'], Fraction(3, 4))
        self.assertAlmostEqual(summary['muc']['f-1'], 0.75)
        self.assertAlmostEqual(summary['conll-F-1'], (0.75 + 0.5 + 1 / 3.) / 3)

    def test_selected_metrics(self):
        result = make_result({'doc1': {'muc': ((1, 2), (1, 1)), 'blanc': ((1, 2), (1, 1))}})
        summary = result.summary(metrics=['blanc'])
        self.assertEqual(sorted(summary), ['blanc', 'conll-F-1'])
        self.assertEqual(summary['conll-F-1'], 0.0)

    def test_to_dict(self):
        result = make_result({'doc1': {'muc': ((1, 2), (1, 1))}})
        self.assertEqual(result.to_dict(), {'doc1': {'muc': {'recall': [1, 2], 'precision': [1, 1]}}})


if __name__ == '__main__':
    unittest.main()
