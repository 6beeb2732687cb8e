SimpleDict = dict[str, str]
SimpleNestedDict = dict[str, SimpleDict]
