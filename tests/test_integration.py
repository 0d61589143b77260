"""
Integration tests for PDF AcroForms.
Parses PDF files written by pypdf end-to-end.
"""

import os
import shutil
import tempfile
import unittest

from pypdf import PdfReader, PdfWriter
from pypdf.generic import (
    ArrayObject,
    DictionaryObject,
    NameObject,
    NumberObject,
    TextStringObject,
)

from pdf_acroforms import PDFDocument, PDFParser, parse_pdf


def _options(*pairs):
    return ArrayObject(
        ArrayObject([TextStringObject(export), TextStringObject(display)])
        for export, display in pairs
    )


class TestPypdfFormWorkflow(unittest.TestCase):
    """Parse a form written by pypdf."""

    @classmethod
    def setUpClass(cls):
        """Create a PDF with a text field, a choice field and a field hierarchy."""
        cls.temp_dir = tempfile.mkdtemp()
        cls.test_pdf = os.path.join(cls.temp_dir, 'form.pdf')

        writer = PdfWriter()
        writer.add_blank_page(width=612, height=792)
        writer.add_metadata({
            '/Title': 'Application Form',
            '/Author': 'Test Author',
        })

        email = writer._add_object(DictionaryObject({
            NameObject('/FT'): NameObject('/Tx'),
            NameObject('/T'): TextStringObject('email'),
            NameObject('/V'): TextStringObject('someone'),
            NameObject('/MaxLen'): NumberObject(64),
        }))
        country = writer._add_object(DictionaryObject({
            NameObject('/FT'): NameObject('/Ch'),
            NameObject('/Ff'): NumberObject(1 << 17),
            NameObject('/T'): TextStringObject('country'),
            NameObject('/Opt'): _options(('FR', 'France'), ('DE', 'Germany')),
        }))
        person = writer._add_object(DictionaryObject({
            NameObject('/T'): TextStringObject('person'),
        }))
        first_name = writer._add_object(DictionaryObject({
            NameObject('/Parent'): person,
            NameObject('/FT'): NameObject('/Tx'),
            NameObject('/T'): TextStringObject('first'),
        }))
        person.get_object()[NameObject('/Kids')] = ArrayObject([first_name])

        writer._root_object[NameObject('/AcroForm')] = DictionaryObject({
            NameObject('/Fields'): ArrayObject([email, country, person]),
        })

        with open(cls.test_pdf, 'wb') as f:
            writer.write(f)

        cls.reader = PdfReader(cls.test_pdf)

    @classmethod
    def tearDownClass(cls):
        """Clean up test environment."""
        shutil.rmtree(cls.temp_dir, ignore_errors=True)

    def test_fields_are_collected(self):
        document = parse_pdf(self.test_pdf)

        self.assertEqual(sorted(document.fields), ['country', 'email', 'first'])

        email = document.fields['email']
        self.assertEqual(email.type, 'Tx')
        self.assertEqual(email.max_len, 64)
        self.assertEqual(
            document.get_entry(email.current_value_line),
            '/V (someone)',
        )

        country = document.fields['country']
        self.assertTrue(country.is_combo)
        self.assertEqual(country.options, {'FR': 'France', 'DE': 'Germany'})

        self.assertEqual(document.fields['first'].full_name, 'person.first')

    def test_metadata_is_collected(self):
        document = parse_pdf(self.test_pdf)

        self.assertEqual(document.metadata['Title'], 'Application Form')
        self.assertEqual(document.metadata['Author'], 'Test Author')
        self.assertEqual(int(document.metadata['size']), self.reader.trailer['/Size'])

    def test_structural_anchors_match_pypdf(self):
        document = parse_pdf(self.test_pdf)
        cross_reference = document.get_cross_reference()

        self.assertEqual(cross_reference.start_value, cross_reference.start_pointer)
        self.assertEqual(cross_reference.count, self.reader.trailer['/Size'] - 1)
        self.assertEqual(len(cross_reference.entries), cross_reference.count)

        in_use = {
            object_id: offset
            for object_id, offset in self.reader.xref[0].items()
            if offset
        }
        self.assertGreaterEqual(len(in_use), 5)
        for object_id, offset in in_use.items():
            self.assertEqual(document.get_offset(object_id), offset)

    def test_need_appearances_is_enabled(self):
        with open(self.test_pdf, 'rb') as f:
            document = PDFDocument.from_bytes(f.read())
        PDFParser(document).parse()

        patched = [entry for entry in document if entry.startswith('/NeedAppearances true /Fields')]
        self.assertEqual(len(patched), 1)

        with open(self.test_pdf, 'rb') as f:
            original = f.read()
        self.assertEqual(
            len(document.to_bytes()),
            len(original) + len('/NeedAppearances true '),
        )


if __name__ == '__main__':
    unittest.main()
