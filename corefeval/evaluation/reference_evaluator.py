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
import multiprocessing
import os
from multiprocessing import Pool

from tqdm import tqdm

from . import config
from .comparison_result import ComparisonResult
from .process import exec_external_command
from .scorer_output import parse_scorer_output
from ..utils.conll_utils import ConllWriter, conll_files, read_conll_documents

logger = logging.getLogger(__name__)

SCORER_OUTPUT_SUFFIX = '-scorer-output'


def remove_files(paths):
    """
    Removes files, errors are returned instead of raised.
    Args:
        paths: files to remove

    Returns:
        list of (path, OSError) for the files which couldn't be removed
    """
    failures = []
    for path in paths:
        try:
            os.remove(path)
        except OSError as e:
            failures.append((path, e))
    return failures


def file_name(name):
    """name usable as a file name in the tmp folder, e.g. doc ids like 'wb/a2e/00/a2e_0000'"""
    return name.strip(os.sep).replace(os.sep, '-').replace('/', '-')


def _compare_document_pair(args):
    """pool task: writes one goldstandard and one compare document and scores them"""
    evaluator, goldstandard, compare, goldstandard_path, compare_path, scorer_output = args
    worker = multiprocessing.current_process().name
    scorer_output_path = '{}-{}.txt'.format(scorer_output, worker)

    evaluator.writer.write(goldstandard, goldstandard_path)
    evaluator.writer.write(compare, compare_path)
    result = evaluator.compare_conll_files(goldstandard_path, compare_path, scorer_output_path)
    evaluator.remove_tmp_files([goldstandard_path, compare_path, scorer_output_path])
    return result


class ReferenceEvaluator(object):
    """
    Calls reference-coreference-scorers and parses its output.

    opt is a dict with the parameters of config.add_cmdline_args, missing ones get
    their default value.
    """

    @staticmethod
    def add_cmdline_args(argparser):
        config.add_cmdline_args(argparser)

    def __init__(self, opt=None):
        self.opt = config.default_options()
        if opt is not None:
            self.opt.update(opt)
        self.n_threads = self.opt['scorer_n_threads']
        if not (self.n_threads > 0 or self.n_threads == -1):
            raise ValueError('scorer_n_threads must be positive or -1, got {}'.format(self.n_threads))
        self.writer = ConllWriter()

    def scorer_command(self, goldstandard, compare):
        cmd = [self.opt['scorer_path'], 'all', os.path.abspath(goldstandard), os.path.abspath(compare)]
        if self.opt['scorer_interpreter']:
            cmd.insert(0, self.opt['scorer_interpreter'])
        return cmd

    def remove_tmp_files(self, paths):
        if not self.opt['remove_tmp_files']:
            return
        for path, error in remove_files(paths):
            logger.debug('could not remove %s: %s', path, error)

    def compare(self, goldstandard, compare, tmp_dir, goldstandard_filename='goldstd', compare_filename='compare'):
        """
        Evaluates metrics for lists of documents.
        Args:
            goldstandard: list of ConllDocument
            compare: list of ConllDocument, the i-th document is compared with the i-th goldstandard document
            tmp_dir: folder for the generated conll files and scorer outputs
            goldstandard_filename: temporary filename for goldstandard .conll file
            compare_filename: temporary filename for compare .conll file, '-compare' is appended
                if it equals goldstandard_filename

        Returns:
            single file mode: ComparisonResult, None if the scorer printed nothing
            per document mode: ComparisonResult without the document pairs the scorer printed nothing for
        """
        if compare_filename == goldstandard_filename:
            compare_filename += '-compare'
        scorer_output = goldstandard_filename + '-' + compare_filename + SCORER_OUTPUT_SUFFIX

        if self.opt['single_file']:
            logger.info('using only one scorer process, set single_file to False to speed things up')
            goldstandard_path = self.writer.write(goldstandard, os.path.join(tmp_dir, goldstandard_filename + '.conll'))
            compare_path = self.writer.write(compare, os.path.join(tmp_dir, compare_filename + '.conll'))
            scorer_output_path = os.path.join(tmp_dir, scorer_output + '.txt')
            result = self.compare_conll_files(goldstandard_path, compare_path, scorer_output_path)
            self.remove_tmp_files([goldstandard_path, compare_path, scorer_output_path])
            return result

        cnt = min(len(goldstandard), len(compare))
        if len(goldstandard) != len(compare):
            logger.warning('%d goldstandard and %d compare documents, comparing the first %d',
                           len(goldstandard), len(compare), cnt)
        pool_args = []
        doc_names = set()
        for i in range(cnt):
            # parts of one document share the id
            doc_name = file_name('{}-{}'.format(goldstandard[i].id, goldstandard[i].part))
            if doc_name in doc_names:
                doc_name = '{}-{}'.format(doc_name, i)
            doc_names.add(doc_name)
            pool_args.append((self, goldstandard[i], compare[i],
                              os.path.join(tmp_dir, goldstandard_filename + '-' + doc_name),
                              os.path.join(tmp_dir, compare_filename + '-' + doc_name),
                              os.path.join(tmp_dir, scorer_output)))

        result = ComparisonResult()
        if cnt == 0:
            return result
        processes = None if self.n_threads == -1 else self.n_threads
        with Pool(processes) as pool:
            for partial in tqdm(pool.imap_unordered(_compare_document_pair, pool_args), total=cnt,
                                desc='scoring documents'):
                if partial is not None:
                    result.merge(partial)
        return result

    def compare_conll_document_files(self, goldstandard, compare, tmp_dir):
        """
        Evaluates metrics for two conll files with one or more documents each.
        Args:
            goldstandard: path to goldstandard conll file
            compare: path to conll file to evaluate
            tmp_dir: folder for generated files

        Returns:
            ComparisonResult
        """
        goldstandard_docs = read_conll_documents(goldstandard)
        compare_docs = read_conll_documents(compare)
        logger.info('read %d goldstandard and %d compare documents', len(goldstandard_docs), len(compare_docs))
        return self.compare(goldstandard_docs, compare_docs, tmp_dir,
                            os.path.basename(goldstandard), os.path.basename(compare))

    def compare_conll_files(self, goldstandard, compare, scorer_output=None):
        """
        Compares two files in conll format.
        Args:
            goldstandard: path to goldstandard conll file
            compare: path to conll file to evaluate
            scorer_output: save output of scorer to this file if set

        Returns:
            ComparisonResult, None if the scorer printed nothing
        """
        logger.debug('comparing %s %s', goldstandard, compare)
        output = exec_external_command(self.scorer_command(goldstandard, compare), cwd=self.opt['scorer_cwd'])
        logger.debug('reference-coreference-scorers output: %s', output)
        if scorer_output is not None:
            with open(scorer_output, 'w', encoding='utf8') as f:
                f.write(output)
            if not self.opt['remove_tmp_files']:
                logger.debug('wrote scorer output to %s', scorer_output)

        result = parse_scorer_output(output)
        if result is None:
            logger.warning('no output from scorer for %s %s', goldstandard, compare)
        return result

    def compare_conll_directories(self, goldstandard_dir, compare_dir, tmp_dir):
        """
        Compares two conll directories by concatenating them into one file each.
        Files are matched by file name, files must end with 'conll'.
        Args:
            goldstandard_dir: folder with goldstandard conll files
            compare_dir: folder with conll files to evaluate
            tmp_dir: folder for the concatenated files and the scorer output

        Returns:
            ComparisonResult, empty if no file matched; None if reading or writing a file failed
        """
        goldstandard_file = os.path.join(tmp_dir, file_name(goldstandard_dir))
        compare_file = os.path.join(tmp_dir, file_name(compare_dir))
        if compare_file == goldstandard_file:
            compare_file += '-compare'
        matched = 0
        try:
            goldstd = {os.path.basename(path): path for path in conll_files(goldstandard_dir)}
            cmp = conll_files(compare_dir)
            with open(goldstandard_file, 'w', encoding='utf8') as goldstandard_out, \
                    open(compare_file, 'w', encoding='utf8') as compare_out:
                for compare_path in cmp:
                    goldstandard_path = goldstd.get(os.path.basename(compare_path))
                    if goldstandard_path is None:
                        logger.warning('goldstandard file not found for compare file: %s', compare_path)
                        continue
                    _append_file(goldstandard_path, goldstandard_out)
                    _append_file(compare_path, compare_out)
                    matched += 1
        except OSError:
            logger.exception('could not concatenate conll files of %s and %s', goldstandard_dir, compare_dir)
            return None

        if matched == 0:
            logger.warning('no conll file of %s matches a file in %s', compare_dir, goldstandard_dir)
            self.remove_tmp_files([goldstandard_file, compare_file])
            return ComparisonResult()

        logger.info('comparing %d conll files', matched)
        scorer_output = os.path.join(tmp_dir, '{}-{}{}.txt'.format(os.path.basename(goldstandard_file),
                                                                    os.path.basename(compare_file),
                                                                    SCORER_OUTPUT_SUFFIX))
        result = self.compare_conll_files(goldstandard_file, compare_file, scorer_output)
        self.remove_tmp_files([goldstandard_file, compare_file, scorer_output])
        return result


def _append_file(path, out):
    with open(path, 'r', encoding='utf8') as f:
        content = f.read()
    out.write(content)
    if content and not content.endswith('\n'):
        out.write('\n')
