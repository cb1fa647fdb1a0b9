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

from .skill import (
    initialize,
    request_handler,
    error_handler,
    test_request,
    lambda_handler,
)

from .intents import (
    Request,
    LaunchRequest,
    IntentRequest,
    SessionEndedRequest,
    UnknownRequest,
    parse_request,
)

from .l10n import (
    Catalog,
    Translator,
    create_translator,
)

from .dispatcher import (
    Dispatcher,
    UnmatchedRequestError,
)

from .responses import (
    Card,
    Response,
    ask,
    tell,
    empty,
)
