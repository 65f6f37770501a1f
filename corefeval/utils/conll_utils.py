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

import os

BEGIN_PREFIX = '#begin document'
END_LINE = '#end document'


class ConllDocument(object):
    """
    Document in CoNLL-2012 format.

    sentences is a list of sentences, a sentence is a list of token rows and a row is
    the list of its columns; the last column holds the coreference chains, e.g. '(3|(5' or '-'.
    """

    def __init__(self, doc_id, sentences=None, part='000'):
        self.id = doc_id
        self.part = part
        self.sentences = sentences if sentences is not None else []

    def __repr__(self):
        return 'ConllDocument({!r}, part={!r}, sentences={})'.format(self.id, self.part, len(self.sentences))

    def __eq__(self, other):
        if not isinstance(other, ConllDocument):
            return NotImplemented
        return (self.id, self.part, self.sentences) == (other.id, other.part, other.sentences)

    @property
    def name(self):
        """document name as printed by the scorer"""
        return '({}); part {}'.format(self.id, self.part)

    def lines(self):
        lines = ['{} {}\n'.format(BEGIN_PREFIX, self.name)]
        for i, sentence in enumerate(self.sentences):
            if i > 0:
                lines.append('\n')
            for row in sentence:
                lines.append('\t'.join(row) + '\n')
        lines.append('\n')
        lines.append(END_LINE + '\n')
        return lines


def get_doc_name(line):
    '''
    returns doc_name and part from #begin line
    '''
    doc_name = line.split('(', 1)[1].rsplit(')', 1)[0]
    part = line.rsplit('part', 1)[1].strip() if 'part' in line.rsplit(')', 1)[1] else '000'
    return doc_name, part


def read_conll_documents(path):
    """
    Splits a conll file into documents.
    Args:
        path: conll file with one or more '#begin document' ... '#end document' blocks

    Returns:
        list of ConllDocument in file order
    """
    documents = []
    doc = None
    sentence = []
    with open(path, 'r', encoding='utf8') as f:
        for line in f:
            line = line.strip()
            if line.startswith(BEGIN_PREFIX):
                doc_name, part = get_doc_name(line)
                doc = ConllDocument(doc_name, part=part)
                sentence = []
            elif line.startswith(END_LINE):
                if doc is not None:
                    if sentence:
                        doc.sentences.append(sentence)
                    documents.append(doc)
                doc, sentence = None, []
            elif len(line) > 0 and line[0] == '#':
                continue
            elif len(line) == 0:
                # empty line between sentences
                if doc is not None and sentence:
                    doc.sentences.append(sentence)
                sentence = []
            elif doc is not None:
                sentence.append(line.split())
    return documents


class ConllWriter(object):
    """Writes documents in the format expected by reference-coreference-scorers"""

    def write(self, documents, path):
        """
        Args:
            documents: ConllDocument or a sequence of them, written in the given order
            path: file to write, it is overwritten

        Returns:
            path
        """
        if isinstance(documents, ConllDocument):
            documents = [documents]
        with open(path, 'w', encoding='utf8') as f:
            for doc in documents:
                f.writelines(doc.lines())
        return path


def _raise(error):
    raise error


def conll_files(path, extension='conll'):
    """all files below path whose name ends with extension, raises OSError if path can't be listed"""
    files = []
    for root, dirs, names in os.walk(path, onerror=_raise):
        dirs.sort()
        for name in sorted(names):
            if name.endswith(extension):
                files.append(os.path.join(root, name))
    return files
