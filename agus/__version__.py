#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# Deutsche Telekom AG and all other contributors /
# copyright owners license this file to you under the MIT
# License (the "License"); you may not use this file
# except in compliance with the License.
# You may obtain a copy of the License at
#
# https://opensource.org/licenses/MIT
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.
#

__name__ = 'agus-skill'
__description__ = 'Agus temperature conversion skill and localized intent dispatcher'
__url__ = 'https://github.com/13udha/Magenta-Hypercube/'
__version__ = '1.2.0'
__author__ = 'Magenta Hypercube'
__license__ = 'MIT'
__copyright__ = 'Copyright 2020, Deutsche Telekom AG'

# Version of the request/response envelope we speak
__envelope_version__ = '1.0'
