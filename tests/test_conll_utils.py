import os
import tempfile
import unittest

from corefeval.utils.conll_utils import ConllDocument, ConllWriter, conll_files, get_doc_name, read_conll_documents


def sentence(doc_id, *tokens):
    return [[doc_id, '0', str(i), word, pos, ref] for i, (word, pos, ref) in enumerate(tokens)]


DOC1 = ConllDocument('doc1', [sentence('doc1', ('John', 'NNP', '(1)'), ('runs', 'VBZ', '-')),
                              sentence('doc1', ('He', 'PRP', '(1)'), ('is', 'VBZ', '-'), ('fast', 'JJ', '-'))])
DOC2 = ConllDocument('nw/wsj/00/wsj_0001', [sentence('nw/wsj/00/wsj_0001', ('Mary', 'NNP', '(2|(3'),
                                                     ('Smith', 'NNP', '2)'), ('left', 'VBD', '3)'))], part='001')


class TestConllWriter(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, 'docs.conll')

    def tearDown(self):
        self.tmp.cleanup()

    def test_single_document_layout(self):
        ConllWriter().write(DOC1, self.path)
        with open(self.path, encoding='utf8') as f:
            lines = f.read().split('\n')
        self.assertEqual(lines[0], '#begin document (doc1); part 000')
        self.assertEqual(lines[1], 'doc1\t0\t0\tJohn\tNNP\t(1)')
        self.assertEqual(lines[3], '')
        self.assertEqual(lines[-3:], ['', '#end document', ''])

    def test_documents_are_read_back_in_order(self):
        ConllWriter().write([DOC1, DOC2], self.path)
        docs = read_conll_documents(self.path)
        self.assertEqual(docs, [DOC1, DOC2])
        self.assertEqual(docs[1].name, '(nw/wsj/00/wsj_0001); part 001')

    def test_unwritable_path(self):
        with self.assertRaises(OSError):
            ConllWriter().write(DOC1, os.path.join(self.tmp.name, 'missing', 'docs.conll'))


class TestReadConll(unittest.TestCase):

    def test_get_doc_name(self):
        self.assertEqual(get_doc_name('#begin document (bc/cctv/00/cctv_0000); part 003'), ('bc/cctv/00/cctv_0000', '003'))
        self.assertEqual(get_doc_name('#begin document (doc1);'), ('doc1', '000'))

    def test_end_without_trailing_blank_line(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, 'doc.v4_conll')
            with open(path, 'w', encoding='utf8') as f:
                f.write('#begin document (doc1); part 0\ndoc1 0 0 John NNP (1)\ndoc1 0 1 runs VBZ -\n#end document')
            docs = read_conll_documents(path)
        self.assertEqual(len(docs), 1)
        self.assertEqual(docs[0].part, '0')
        self.assertEqual(docs[0].sentences, [sentence('doc1', ('John', 'NNP', '(1)'), ('runs', 'VBZ', '-'))])

    def test_conll_files(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            os.makedirs(os.path.join(tmp_dir, 'sub'))
            for name in ('b.conll', 'a.v4_conll', os.path.join('sub', 'c.conll'), 'notes.txt'):
                open(os.path.join(tmp_dir, name), 'w').close()
            files = [os.path.relpath(p, tmp_dir) for p in conll_files(tmp_dir)]
        self.assertEqual(files, ['a.v4_conll', 'b.conll', os.path.join('sub', 'c.conll')])

    def test_conll_files_missing_folder(self):
        with self.assertRaises(OSError):
            conll_files('/nonexistent/conll/folder')


if __name__ == '__main__':
    unittest.main()
