import unittest

from mindmap_builder.utils.tokenizer import tokenize


class TokenizerTests(unittest.TestCase):
    def test_english_tokenize_removes_stopwords(self) -> None:
        tokens = tokenize("The roadmap is ambitious and focused")
        self.assertIn("roadmap", tokens)
        self.assertIn("ambitious", tokens)
        self.assertNotIn("the", tokens)
        self.assertNotIn("and", tokens)

    def test_tokens_are_lowercased(self) -> None:
        self.assertEqual(tokenize("Beta LAUNCH"), ["beta", "launch"])

    def test_blank_text_has_no_tokens(self) -> None:
        self.assertEqual(tokenize("   "), [])

    def test_chinese_tokenize_returns_non_empty_tokens(self) -> None:
        tokens = tokenize("项目背景和技术方案")
        self.assertTrue(tokens)
        self.assertNotIn("和", tokens)


if __name__ == "__main__":
    unittest.main()
