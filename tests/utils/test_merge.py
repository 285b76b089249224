from tetherio.utils import deep_merge


class TestDeepMerge:

    def test_nested_dicts_are_merged(self):
        parent = {"device": {"transport": "mirror", "root": "/a"}, "encoding": "utf-8"}
        merged = deep_merge(parent, {"device": {"root": "/b"}})
        assert merged == {"device": {"transport": "mirror", "root": "/b"}, "encoding": "utf-8"}

    def test_none_keeps_parent_value(self):
        assert deep_merge({"file": "log.txt"}, {"file": None}) == {"file": "log.txt"}

    def test_parent_is_not_mutated(self):
        parent = {"log": {"levels": {"io": "DEBUG"}}}
        deep_merge(parent, {"log": {"levels": {"cli": "INFO"}}})
        assert parent == {"log": {"levels": {"io": "DEBUG"}}}

    def test_non_dict_replaces(self):
        assert deep_merge({"levels": {"io": "DEBUG"}}, {"levels": "none"}) == {"levels": "none"}
