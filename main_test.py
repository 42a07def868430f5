import os
import shutil
import tempfile
import unittest
from pathlib import Path

import mock
from PIL import Image

import main
from controller.cups_printer import CupsPrinter
from controller.image_picker import DirectoryPicker, PathListPicker


class MainTest(unittest.TestCase):

    def setUp(self):
        self.directory = Path(tempfile.mkdtemp())
        self.photos = []
        for i, color in enumerate([(255, 0, 0), (0, 255, 0), (0, 0, 255)]):
            path = self.directory / f'photo{i}.jpg'
            Image.new('RGB', (60, 40), color).save(path)
            self.photos.append(path)

    def tearDown(self):
        shutil.rmtree(self.directory)

    def args(self, *extra):
        return main.build_arg_parser().parse_args([str(p) for p in self.photos] + list(extra))

    def test_defaults_build_a_path_picker_without_printer(self):
        job = main.build_job(self.args())
        self.assertIsInstance(job._picker, PathListPicker)
        self.assertIsNone(job._printer)
        self.assertEqual(job._canvas.resolution, 309)

    def test_printer_option_builds_cups_printer(self):
        job = main.build_job(self.args('--printer', 'Selphy', '--copies', '2'))
        self.assertIsInstance(job._printer, CupsPrinter)
        self.assertEqual(job._copies, 2)

    def test_directory_option_builds_directory_picker(self):
        args = main.build_arg_parser().parse_args(['--directory', str(self.directory)])
        job = main.build_job(args)
        self.assertIsInstance(job._picker, DirectoryPicker)

    def test_resolution_and_scale_change_canvas(self):
        job = main.build_job(self.args('--resolution', '100', '--scale', '1'))
        self.assertEqual(job._canvas.width, round(3.879 * 100))
        self.assertEqual(job._canvas.height, round(5.819 * 100))

    def test_main_saves_filmstrip(self):
        self.assertEqual(main.main([str(p) for p in self.photos] + ['--resolution', '50']), 0)
        self.assertTrue(os.path.exists(self.directory / 'Filmstrip.jpg'))

    def test_main_fails_with_two_images(self):
        self.assertEqual(main.main([str(p) for p in self.photos[:2]]), 1)
        self.assertFalse(os.path.exists(self.directory / 'Filmstrip.jpg'))

    def test_main_fails_on_bad_quality(self):
        self.assertEqual(main.main([str(p) for p in self.photos] + ['--quality', '0']), 1)

    def test_main_fails_on_bad_frame_fraction(self):
        self.assertEqual(main.main([str(p) for p in self.photos] + ['--frame-height-fraction', '0.5']), 1)

    def test_main_fails_on_zero_copies(self):
        self.assertEqual(main.main([str(p) for p in self.photos] + ['--copies', '0']), 1)
        self.assertFalse(os.path.exists(self.directory / 'Filmstrip.jpg'))

    @mock.patch('main.CupsPrinter')
    def test_main_prints_when_printer_given(self, mock_printer):
        self.assertEqual(main.main([str(p) for p in self.photos] + ['--printer', 'Selphy', '--resolution', '50']), 0)
        mock_printer.assert_called_once_with(printer_name='Selphy', media='Custom.3.879x5.819in')
        mock_printer.return_value.preflight.assert_called_once_with()
        mock_printer.return_value.print_file.assert_called_once_with(
            self.directory / 'Filmstrip.jpg', copies=1)


if __name__ == '__main__':
    unittest.main()
