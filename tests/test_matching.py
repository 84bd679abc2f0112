"""Tests for the keyword prefilter and tag extraction"""

import pytest

from fixme.extract import apply_rule, extract_matches
from fixme.prefilter import Prefilter
from fixme.tags import DEFAULT_RULES, RULES_BY_TAG, Tag, keywords


@pytest.fixture
def prefilter():
    return Prefilter(keywords())


class TestPrefilter:
    """Tests for Prefilter"""

    def test_finds_keyword_anywhere(self, prefilter):
        assert prefilter.has_candidate(b'// TODO: fix this')
        assert prefilter.has_candidate(b'x = 1  # trailing FIXME')
        assert prefilter.has_candidate(b'BUGS everywhere')

    def test_rejects_line_without_keywords(self, prefilter):
        assert not prefilter.has_candidate(b'def main():')
        assert not prefilter.has_candidate(b'')

    def test_is_case_sensitive(self, prefilter):
        """Lower case keywords do not pass the gate"""
        assert not prefilter.has_candidate(b'// todo: lower case')
        assert not prefilter.has_candidate(b'# Note: prose')

    def test_accepts_str(self, prefilter):
        assert prefilter.has_candidate('// HACK: str input')
        assert not prefilter.has_candidate('nothing here')

    def test_non_ascii_line(self, prefilter):
        assert prefilter.has_candidate('// NOTE: ünïcödé'.encode('utf-8'))
        assert not prefilter.has_candidate('ünïcödé'.encode('utf-8'))

    def test_keywords_longest_first(self):
        pf = Prefilter(['XXX', 'OPTIMIZE', 'BUG', 'BUG'])
        assert pf.keywords == ('OPTIMIZE', 'BUG', 'XXX')

    def test_requires_keywords(self):
        with pytest.raises(ValueError):
            Prefilter([])
        with pytest.raises(ValueError):
            Prefilter([''])

    def test_regex_metacharacters_are_literal(self):
        pf = Prefilter(['A.B'])
        assert pf.has_candidate(b'xx A.B yy')
        assert not pf.has_candidate(b'xx AxB yy')

    @pytest.mark.parametrize('rule', DEFAULT_RULES, ids=lambda r: r.keyword)
    def test_no_false_negatives(self, prefilter, rule):
        """Every line a rule extracts from (upper case tag) passes the gate"""
        lines = [
            f'// {rule.keyword}: message',
            f'/* {rule.keyword}(dev) message */',
            f'   #{rule.keyword} message',
            f'% {rule.keyword}: message',
            f'code();  // {rule.keyword}: trailing',
        ]
        for line in lines:
            assert apply_rule(rule, line) is not None
            assert prefilter.has_candidate(line)

    def test_rejected_lines_never_extract(self, prefilter):
        lines = [
            'import os',
            '// just a comment',
            '# nothing to see',
            'value = compute(x) % 3',
            '/* block comment */',
        ]
        for line in lines:
            assert not prefilter.has_candidate(line)
            assert extract_matches(line, 1) == []


class TestExtractMatches:
    """Tests for extract_matches()"""

    def test_bare_tag_is_suppressed(self):
        assert extract_matches('// TODO', 1) == []
        assert extract_matches('// TODO:   ', 1) == []
        assert extract_matches('# FIXME(alice):', 1) == []

    def test_simple_todo(self):
        matches = extract_matches('// TODO: fix this', 7)

        assert len(matches) == 1
        match = matches[0]
        assert match.tag == 'TODO'
        assert match.label == ' ✓ TODO'
        assert match.author == ''
        assert match.message == 'fix this'
        assert match.line_number == 7

    def test_author(self):
        matches = extract_matches('# FIXME(alice): broken', 3)

        assert len(matches) == 1
        assert matches[0].tag == 'FIXME'
        assert matches[0].author == 'alice'
        assert matches[0].message == 'broken'

    def test_author_without_colon(self):
        matches = extract_matches('// BUG(bob) crashes on start', 1)

        assert matches[0].author == 'bob'
        assert matches[0].message == 'crashes on start'

    def test_empty_author(self):
        matches = extract_matches('// XXX(): empty author', 1)

        assert matches[0].author == ''
        assert matches[0].message == 'empty author'

    def test_message_is_trimmed(self):
        matches = extract_matches('x = 1  #   TODO:    trailing space   ', 1)
        assert matches[0].message == 'trailing space'

    def test_no_colon(self):
        matches = extract_matches('% HACK quick fix', 1)
        assert matches[0].tag == 'HACK'
        assert matches[0].message == 'quick fix'

    @pytest.mark.parametrize('opener', ['//', '/*', '#', '%'])
    def test_comment_openers(self, opener):
        matches = extract_matches(f'{opener} NOTE: remember', 1)
        assert [m.tag for m in matches] == ['NOTE']

    def test_block_comment_keeps_closer(self):
        matches = extract_matches('/* OPTIMIZE: cache this */', 1)
        assert matches[0].message == 'cache this */'

    def test_requires_comment_opener(self):
        assert extract_matches('TODO: not in a comment', 1) == []
        assert extract_matches('-- TODO: sql comment', 1) == []

    def test_word_boundary(self):
        assert extract_matches('// TODOS: plural', 1) == []
        assert extract_matches('// BUGFIX: landed', 1) == []

    def test_word_boundary_is_ascii(self):
        """Non-ASCII letters after the keyword end the word"""
        matches = extract_matches('// TODO\u00e9: accent', 1)

        assert len(matches) == 1
        assert matches[0].tag == 'TODO'
        assert matches[0].message == '\u00e9: accent'

    def test_author_kept_verbatim(self):
        matches = extract_matches('// TODO( alice ): x', 1)

        assert matches[0].author == ' alice '
        assert matches[0].message == 'x'

    def test_case_insensitive(self):
        matches = extract_matches('// todo: lower case', 1)
        assert len(matches) == 1
        assert matches[0].tag == 'TODO'

    def test_multiple_tags_in_rule_order(self):
        matches = extract_matches('// TODO: first // NOTE: second', 1)

        assert [m.tag for m in matches] == ['NOTE', 'TODO']
        assert matches[0].message == 'second'
        assert matches[1].message == 'first // NOTE: second'

    def test_one_match_per_rule(self):
        matches = extract_matches('// TODO: a // TODO: b', 1)
        assert len(matches) == 1
        assert matches[0].message == 'a // TODO: b'

    def test_custom_rule_subset(self):
        rules = (RULES_BY_TAG[Tag.BUG],)
        assert extract_matches('// TODO: ignored', 1, rules) == []
        assert [m.tag for m in extract_matches('// BUG: kept', 1, rules)] == ['BUG']


class TestRuleTable:
    """Tests for the tag table"""

    def test_table_order(self):
        assert [r.keyword for r in DEFAULT_RULES] == ['NOTE', 'OPTIMIZE', 'TODO', 'HACK', 'XXX', 'FIXME', 'BUG']

    def test_labels_are_unique(self):
        labels = [r.label for r in DEFAULT_RULES]
        assert len(set(labels)) == len(labels)

    def test_only_bug_is_a_badge(self):
        assert [r.keyword for r in DEFAULT_RULES if r.style.badge] == ['BUG']
