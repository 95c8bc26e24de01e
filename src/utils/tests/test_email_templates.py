"""Tests for transactional email templates."""

import unittest

from utils.email_templates import build_welcome_email


class TestWelcomeEmail(unittest.TestCase):

    def test_subject_and_greeting(self):
        email = build_welcome_email('Ann Lee')

        self.assertEqual(email.subject, 'Welcome to SaaS by Async')
        self.assertIn('Welcome Ann Lee!', email.body)

    def test_name_is_html_escaped(self):
        email = build_welcome_email('<script>x</script>')

        self.assertNotIn('<script>', email.body)
        self.assertIn('&lt;script&gt;', email.body)

    def test_missing_name_falls_back(self):
        self.assertIn('Welcome there!', build_welcome_email('').body)


if __name__ == '__main__':
    unittest.main()
