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

"""
    corefeval.evaluation

    Evaluates coreference annotations against a goldstandard with the official
    CoNLL-2012 reference scorer [1].

    Scoring
        1. Goldstandard and compared documents are written to conll files in a temporary folder.
        2. reference-coreference-scorers v8.01 is called with metric 'all' on the pair of files.
        3. The scorer report is parsed into recall and precision fractions per document and metric.

    Strategies
        single file     all documents go into one pair of files, one scorer call.
        per document    one scorer call per document pair, executed by a pool of workers,
                        partial results are merged.

    Summary
        Fractions are summed over documents per metric, CoNLL-F-1 is the mean F-1 of muc, bcub and ceafe.

    References
        [1] CoNLL-2012 shared task http://conll.cemantix.org/2012/
"""

from .comparison_result import ComparisonResult, Fraction, MetricScore
from .reference_evaluator import ReferenceEvaluator
from .scorer_output import parse_scorer_output
