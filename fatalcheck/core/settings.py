# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; specifically version 2 of the License.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
#
# See LICENSE for more details.

"""
Configuration handler.

Settings() is a thin layer over configparser that concentrates all
default values in one place. Option values come from these sources, in
the following order:

  1. Default values: "source code" defined. Core modules call
     settings.register_option() with the default value as argument, once.

  2. System configuration files (/etc/fatalcheck/fatalcheck.conf and
     /etc/fatalcheck/conf.d/*.conf), or the same paths under $VIRTUAL_ENV.

  3. The user configuration file (~/.config/fatalcheck/fatalcheck.conf),
     and any file given to process_config_path().
"""

import configparser
import glob
import json
import os
import re


def sorted_dict(dict_object):
    return sorted(dict_object.items(), key=lambda t: t[0])


class SettingsError(Exception):
    """
    Base settings error.
    """


class DuplicatedNamespace(SettingsError):
    """
    Raised when a namespace is already registered.
    """


class ConfigOption:
    def __init__(self, namespace, help_msg, key_type=str, default=None):
        self.namespace = namespace
        self.help_msg = help_msg
        self.key_type = key_type
        self.default = default
        self._value = None

    @property
    def section(self):
        return '.'.join(self.namespace.split('.')[:-1])

    @property
    def key(self):
        return self.namespace.split('.')[-1]

    @property
    def value(self):
        if self._value is not None:
            return self._value
        return self.default

    def set_value(self, value, convert=False):
        if convert is False:
            self._value = value
        else:
            self._value = self.key_type(value)


class Settings:
    """Settings is the fatalcheck configuration handler.

    You don't need to instantiate a new settings, just import and use
    `register_option()`:

        from fatalcheck.core.settings import settings
        settings.register_option(...)

    And when you need the current value, look up the namespace
    (section.key) that you registered:

        value = settings.as_dict().get('a.section.key')

    .. note:: Please, do not use a default value when using `get()` here. If
              you are using an existing namespace, get will always return a
              value, either the default value, or the value set by the user.
    """

    def __init__(self):
        """Constructor. Tries to find the main settings files and load them."""
        self.config = configparser.ConfigParser()
        self.all_config_paths = []
        self.config_paths = []
        self._namespaces = {}

        # 1. Prepare config paths
        self._prepare_base_dirs()
        self._append_config_paths()

        # 2. Parse/read all config paths
        self.config_paths = self.config.read(self.all_config_paths)

    def _append_config_paths(self):
        self._append_system_config()
        self._append_user_config()

    def _append_system_config(self):
        self.all_config_paths.append(self._config_path_system)
        configs = glob.glob(os.path.join(self._config_dir_system_extra,
                                         '*.conf'))
        for extra_file in sorted(configs):
            self.all_config_paths.append(extra_file)

    def _append_user_config(self):
        if os.path.exists(self._config_path_local):
            self.all_config_paths.append(self._config_path_local)

    def _prepare_base_dirs(self):
        cfg_dir = '/etc'
        user_dir = os.path.expanduser("~")

        if 'VIRTUAL_ENV' in os.environ:
            cfg_dir = os.path.join(os.environ['VIRTUAL_ENV'], 'etc')
            user_dir = os.environ['VIRTUAL_ENV']

        config_file_name = 'fatalcheck.conf'
        self._config_dir_system = os.path.join(cfg_dir, 'fatalcheck')
        self._config_dir_system_extra = os.path.join(cfg_dir,
                                                     'fatalcheck',
                                                     'conf.d')
        self._config_dir_local = os.path.join(user_dir, '.config',
                                              'fatalcheck')
        self._config_path_system = os.path.join(self._config_dir_system,
                                                config_file_name)
        self._config_path_local = os.path.join(self._config_dir_local,
                                               config_file_name)

    def as_dict(self, regex=None):
        """Return a dictionary with the current active settings.

        If regex is not None, this method will filter the current config
        matching regex with the namespaces.

        :param regex: A regular expression to be used on the filter.
        """
        result = {}
        for namespace, option in sorted_dict(self._namespaces):
            result[namespace] = option.value

        return self.filter_config(result, regex) if regex else result

    def as_json(self, regex=None):
        """Return a JSON with the current active settings.

        :param regex: A regular expression to be used on the filter.
        """
        return json.dumps(self.as_dict(regex), indent=4)

    @staticmethod
    def filter_config(config, regex):
        """Utility to filter a config by namespaces based on a regex.

        :param config: dict object with namespaces and values
        :param regex: regular expression to use against the namespace
        """
        result = {}
        for namespace, option in sorted_dict(config):
            if re.match(regex, namespace):
                result[namespace] = option
        return result

    def merge_with_configs(self):
        """Merge the current settings with the config file options.

        After parsing config file options this method should be executed to
        have an unified settings.
        """
        for section in self.config:
            items = self.config.items(section)
            for key, value in items:
                namespace = "{}.{}".format(section, key)
                self.update_option(namespace, value, convert=True)

    def process_config_path(self, path):
        """Update list of config paths and process the given path."""
        self.all_config_paths.append(path)
        self.config_paths.extend(self.config.read(path))

    def register_option(self, section, key, default, help_msg, key_type=str):
        """Method used to register a configuration option.

        Using this method, you need to specify a "section", "key", "default"
        value and a "help_msg" always. For instance:

            settings.register_option(section='foo', key='bar', default='hello',
                                     help_msg='this is just a test')

        This will register a 'foo.bar' namespace, that could be changed by
        the users or system configuration files:

           [foo]
           bar = a different message replacing 'hello'

        Arguments

        section : str
            The configuration file section that your option should be present.
            You can specify subsections with dots. i.e: expectation.worker

        key : str
            What is the key name of your option inside that section.

        default : typeof(key_type)
            The default value of an option. The default value should be
            "processed", it means the value should already match key_type.

        help_msg : str
            The help message describing the option.

        key_type : any method
            What is the type of your option? Currently supported: int, float,
            str or a custom method taking the string read from a config
            file. Default is `str`.
        """
        namespace = "{}.{}".format(section, key)
        if namespace in self._namespaces:
            msg = 'Key "{}" already registered under section "{}"'.format(key,
                                                                          section)
            raise DuplicatedNamespace(msg)

        option = ConfigOption(namespace, help_msg, key_type, default)
        self._namespaces[namespace] = option

    def update_option(self, namespace, value, convert=False):
        """Convenient method to change the option's value.

        Unregistered namespaces are ignored. When convert is True, the value
        is converted to the 'key_type' given at registration, which is what
        values read from config files (always strings) need.

        Arguments

        namespace : str
            Your section plus your key, separated by dots. The last
            part of the namespace is your key. i.e: expectation.timeout

        value : any type
            This is the new value to update.

        convert : bool
            If the value should be converted and stored as the 'key_type'
            specified during the register. Default is False.
        """
        if namespace not in self._namespaces:
            return

        self._namespaces[namespace].set_value(value, convert)


settings = Settings()  # pylint: disable-msg=invalid-name
