# Copyright 2025 Google LLC
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
# ==============================================================================


import unittest

from spa_shared.json_utils import camel_to_snake, convert_keys, snake_to_camel


class JsonUtilsTest(unittest.TestCase):

    def test_key_helpers(self):
        self.assertEqual(snake_to_camel("secure_url"), "secureUrl")
        self.assertEqual(snake_to_camel("id"), "id")
        self.assertEqual(camel_to_snake("publicId"), "public_id")
        self.assertEqual(camel_to_snake("toFolder"), "to_folder")

    def test_convert_nested(self):
        data = {"public_id": "staffs/a", "context": [{"alt_text": "x"}]}
        self.assertEqual(
            convert_keys(data, "snake_to_camel"),
            {"publicId": "staffs/a", "context": [{"altText": "x"}]},
        )
        self.assertEqual(convert_keys("folderName", "camel_to_snake"), "folderName")

    def test_unknown_direction(self):
        with self.assertRaises(ValueError):
            convert_keys({}, "kebab")


if __name__ == "__main__":
    unittest.main()
