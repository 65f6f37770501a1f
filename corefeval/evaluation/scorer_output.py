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

import logging
import re
from collections import namedtuple

from .comparison_result import ComparisonResult, Fraction, MetricScore

logger = logging.getLogger(__name__)

EXPECTED_VERSION = 'version: 8.01'
METRIC_PREFIX = 'METRIC '
DOCID_PREFIX = '====>'
TOTALS_HEADER = '====== TOTALS ======='

FLOAT_REGEX = r'\d*\.?\d+'


def ratio_block_regex(label):
    """
    Regex for one block of a score line, e.g. 'Recall: (3 / 5) 60%'
    Args:
        label: Recall, Precision or F1, also used as prefix of the group names

    Returns:
        regex string with groups <label>Nom, <label>Denom (optional) and <label>Pct
    """
    fraction = r'\((?P<{0}Nom>{1})\s*/\s*(?P<{0}Denom>{1})\)'.format(label, FLOAT_REGEX)
    percent = r'\s*(?P<{0}Pct>{1})%\s*'.format(label, FLOAT_REGEX)
    return r'{0}:\s*(?:{1})?{2}'.format(label, fraction, percent)


RECALL_PATTERN = re.compile(ratio_block_regex('Recall'))
PRECISION_PATTERN = re.compile(ratio_block_regex('Precision'))
F1_PATTERN = re.compile(ratio_block_regex('F1'))
SCORE_LINE_PATTERN = re.compile(RECALL_PATTERN.pattern + PRECISION_PATTERN.pattern + F1_PATTERN.pattern + '.*')

# metric and document the next score line belongs to
ScanContext = namedtuple('ScanContext', ['metric', 'doc_id'])


def advance_context(context, line):
    """Returns the context after reading line"""
    if line.startswith(METRIC_PREFIX):
        context = context._replace(metric=line[len(METRIC_PREFIX):-1])
    if line.startswith(DOCID_PREFIX):
        context = context._replace(doc_id=line[len(DOCID_PREFIX) + 1:-1])
    if line == TOTALS_HEADER:
        context = context._replace(doc_id=None)
    return context


FRACTION_GROUPS = ('RecallNom', 'RecallDenom', 'PrecisionNom', 'PrecisionDenom')


def score_from_match(m):
    """
    Args:
        m: match of SCORE_LINE_PATTERN

    Returns:
        MetricScore, None if the line has no recall or precision fraction
    """
    if any(m.group(g) is None for g in FRACTION_GROUPS):
        return None
    recall_nom, recall_denom, precision_nom, precision_denom = (float(m.group(g)) for g in FRACTION_GROUPS)
    return MetricScore(Fraction(recall_nom, recall_denom), Fraction(precision_nom, precision_denom))


def parse_scorer_output(output):
    """
    Gets documents, metrics and their recall and precision values from the report of
    'scorer.pl all'. The TOTALS section is skipped.
    Args:
        output: report as a string

    Returns:
        ComparisonResult, None if the report is empty
    """
    lines = output.splitlines()
    if len(lines) < 1:
        return None
    if not lines[0].startswith(EXPECTED_VERSION):
        logger.warning('expected %s, but got %s', EXPECTED_VERSION, lines[0])

    result = ComparisonResult()
    context = ScanContext(metric=None, doc_id=None)
    for i, line in enumerate(lines):
        context = advance_context(context, line)

        m = SCORE_LINE_PATTERN.fullmatch(line)
        if m is None:
            if 'Recall' in line:
                logger.debug("pattern didn't match %s", line)
            continue
        if context.metric is None:
            logger.error('metric is None, line %d', i)
        elif context.doc_id is None:
            logger.error('docid is None, line %d', i)
        else:
            score = score_from_match(m)
            if score is None:
                logger.error('recall or precision fraction missing, line %d: %s', i, line)
            else:
                result.add(context.doc_id, context.metric, score)
    return result
