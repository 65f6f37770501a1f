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
"""Scores conll predictions against a goldstandard with reference-coreference-scorers.

Run with, e.g.:

corefeval-score data/gold.conll predictions/gold.conll --tmp_dir /tmp/scorer

..or, with one file per document..

corefeval-score data/gold/ predictions/ --scorer_path lib/scorer/v8.01/scorer.pl --output results.json
"""
import argparse
import json
import logging
import os
import shutil
import sys
import tempfile

from .evaluation.reference_evaluator import ReferenceEvaluator

logger = logging.getLogger(__name__)


def arg_parse(args=None):
    parser = argparse.ArgumentParser(description='Evaluates coreference annotations with the CoNLL-2012 scorer')
    parser.add_argument('goldstandard', help='goldstandard conll file or folder')
    parser.add_argument('compare', help='conll file or folder to evaluate')
    parser.add_argument('--tmp_dir', type=str, default=None,
                        help='folder for generated files, a new temporary folder by default')
    parser.add_argument('--output', type=str, default=None, help='write scores as json to this file')
    parser.add_argument('--log_level', type=str, default='INFO', help='DEBUG, INFO, WARNING, ...')
    ReferenceEvaluator.add_cmdline_args(parser)
    return vars(parser.parse_args(args=args))


def format_summary(summary):
    lines = []
    for metric, res in summary.items():
        if metric == 'conll-F-1':
            continue
        lines.append('{0} precision: ({1:.3f}/{2}) {3:.3f}\t recall: ({4:.3f}/{5}) {6:.3f}\t F-1: {7:.5f}'.format(
            metric, res['precision'].numerator, res['precision'].denominator, res['p'],
            res['recall'].numerator, res['recall'].denominator, res['r'], res['f-1']))
    lines.append('conll-F-1: {:.5f}'.format(summary['conll-F-1']))
    return '\n'.join(lines)


def score(opt):
    """runs the evaluation described by opt, returns ComparisonResult or None"""
    evaluator = ReferenceEvaluator(opt)
    tmp_dir = opt['tmp_dir']
    if tmp_dir is None:
        tmp_dir = tempfile.mkdtemp(prefix='corefeval-')
    else:
        os.makedirs(tmp_dir, exist_ok=True)

    if os.path.isdir(opt['goldstandard']) and os.path.isdir(opt['compare']):
        result = evaluator.compare_conll_directories(opt['goldstandard'], opt['compare'], tmp_dir)
    else:
        result = evaluator.compare_conll_document_files(opt['goldstandard'], opt['compare'], tmp_dir)

    if opt['tmp_dir'] is None and evaluator.opt['remove_tmp_files']:
        shutil.rmtree(tmp_dir, ignore_errors=True)
    return result


def main(args=None):
    opt = arg_parse(args)
    logging.basicConfig(level=opt['log_level'].upper(),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    result = score(opt)
    if result is None:
        logger.error('evaluation failed')
        return 1

    summary = result.summary()
    print(format_summary(summary))
    if opt['output']:
        with open(opt['output'], 'w', encoding='utf8') as f:
            json.dump({'documents': result.to_dict(), 'summary': summary}, f, indent=2)
    return 0


if __name__ == '__main__':
    sys.exit(main())
