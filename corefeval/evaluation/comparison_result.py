# Copyright 2017 Neural Networks and Deep Learning lab, MIPT
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from collections import namedtuple

import numpy as np

CONLL_METRICS = ('muc', 'bcub', 'ceafe')


class Fraction(namedtuple('Fraction', ['numerator', 'denominator'])):
    """Unreduced ratio as printed by the scorer, e.g. (3 / 5)"""
    __slots__ = ()

    @property
    def value(self):
        return 0 if self.denominator == 0 else self.numerator / float(self.denominator)

    def __str__(self):
        return '({0:g} / {1:g})'.format(self.numerator, self.denominator)


class MetricScore(namedtuple('MetricScore', ['recall', 'precision'])):
    """Recall and precision of one metric on one document"""
    __slots__ = ()

    @property
    def f1(self):
        r, p = self.recall.value, self.precision.value
        return 0 if (p + r) == 0 else (2 * p * r) / (p + r)


class ComparisonResult(dict):
    """
    Scores of a comparison: document id -> metric name -> MetricScore.

    Filled by the scorer output parser; partial results of the per document
    strategy are combined with merge.
    """

    def add(self, doc_id, metric, score):
        self.setdefault(doc_id, {})[metric] = score

    def merge(self, other):
        """
        Adds all scores of other to this result.
        Args:
            other: ComparisonResult

        Returns:
            self

        Metric maps of documents present in both results are united; for the same
        document and metric the score of other replaces the existing one.
        """
        for doc_id, metric_to_score in other.items():
            self.setdefault(doc_id, {}).update(metric_to_score)
        return self

    def metrics(self):
        names = set()
        for metric_to_score in self.values():
            names.update(metric_to_score)
        return sorted(names)

    def score_count(self):
        return sum(len(metric_to_score) for metric_to_score in self.values())

    def summary(self, metrics=None):
        """
        Aggregates the result over all documents.
        Args:
            metrics: metric names to aggregate, all metrics of the result by default

        Returns: dict {metric: {'r': recall, 'p': precision, 'f-1': f1,
                                'recall': Fraction, 'precision': Fraction},
                       'conll-F-1': mean f1 of muc, bcub, ceafe (0 if none of them is present)}
        """
        if metrics is None:
            metrics = self.metrics()
        res = dict()
        for metric in metrics:
            scores = [m[metric] for m in self.values() if metric in m]
            recall = Fraction(sum(s.recall.numerator for s in scores), sum(s.recall.denominator for s in scores))
            precision = Fraction(sum(s.precision.numerator for s in scores),
                                 sum(s.precision.denominator for s in scores))
            total = MetricScore(recall, precision)
            res[metric] = {'r': recall.value, 'p': precision.value, 'f-1': total.f1,
                           'recall': recall, 'precision': precision}

        conll = [res[metric]['f-1'] for metric in CONLL_METRICS if metric in res]
        res['conll-F-1'] = float(np.mean(conll)) if conll else 0.0
        return res

    def to_dict(self):
        """json friendly representation"""
        return {doc_id: {metric: {'recall': list(score.recall), 'precision': list(score.precision)}
                         for metric, score in metric_to_score.items()}
                for doc_id, metric_to_score in self.items()}
