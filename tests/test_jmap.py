import unittest

from masked_fastmail.errors import (
    EmptyResponseError,
    IndexOutOfRangeError,
    MalformedEntryError,
    MethodError,
    ProtocolError,
    TooFewElementsError,
    TopLevelProtocolError,
)
from masked_fastmail.providers.jmap import (
    CORE_CAPABILITY,
    MASKED_EMAIL_CAPABILITY,
    METHOD_GET,
    METHOD_SET,
    JMAPResponse,
    MethodCall,
    build_request,
    expect_method_response,
    method_result,
    validate_response,
)


class TestBuildRequest(unittest.TestCase):
    def test_envelope_shape(self) -> None:
        payload = build_request(
            MethodCall(METHOD_GET, {"accountId": "u1", "properties": ["email"]}),
            MethodCall(METHOD_SET, {"accountId": "u1"}, call_id="set"),
        )
        self.assertEqual(payload["using"], [CORE_CAPABILITY, MASKED_EMAIL_CAPABILITY])
        self.assertEqual(
            payload["methodCalls"],
            [
                [METHOD_GET, {"accountId": "u1", "properties": ["email"]}, "c0"],
                [METHOD_SET, {"accountId": "u1"}, "set"],
            ],
        )

    def test_arguments_are_copied(self) -> None:
        arguments = {"accountId": "u1", "properties": ["email"]}
        payload = build_request(MethodCall(METHOD_GET, arguments))
        arguments["properties"].append("state")
        self.assertEqual(payload["methodCalls"][0][1]["properties"], ["email"])

    def test_unserializable_arguments(self) -> None:
        with self.assertRaises(TypeError):
            build_request(MethodCall(METHOD_GET, {"accountId": object()}))


class TestValidateResponse(unittest.TestCase):
    def test_round_trip_preserves_order(self) -> None:
        calls = [MethodCall(METHOD_GET, {"accountId": "u1"}), MethodCall(METHOD_SET, {"accountId": "u1"})]
        request = build_request(*calls)
        reply = {
            "methodResponses": [[name, {"accountId": "u1"}, call_id] for name, _, call_id in request["methodCalls"]],
            "sessionState": "abc",
        }
        response = validate_response(reply)
        self.assertEqual([entry[0] for entry in response.method_responses], [METHOD_GET, METHOD_SET])
        self.assertEqual([entry[2] for entry in response.method_responses], ["c0", "c1"])
        self.assertEqual(response.session_state, "abc")

    def test_empty_response(self) -> None:
        with self.assertRaises(EmptyResponseError):
            validate_response({"methodResponses": []})
        with self.assertRaises(EmptyResponseError):
            validate_response({})

    def test_top_level_errors_surfaced_verbatim(self) -> None:
        with self.assertRaises(TopLevelProtocolError) as ctx:
            validate_response(
                {"methodResponses": [[METHOD_GET, {}, "c0"]], "methodErrors": [{"type": "serverFail"}]}
            )
        self.assertEqual(ctx.exception.errors, [{"type": "serverFail"}])

    def test_top_level_errors_win_over_empty_responses(self) -> None:
        with self.assertRaises(TopLevelProtocolError) as ctx:
            validate_response({"methodResponses": [], "methodErrors": [{"type": "serverFail"}]})
        self.assertEqual(ctx.exception.errors, [{"type": "serverFail"}])

    def test_short_entry_is_malformed(self) -> None:
        with self.assertRaises(MalformedEntryError) as ctx:
            validate_response({"methodResponses": [[METHOD_GET]]})
        self.assertEqual(ctx.exception.index, 0)

    def test_short_error_entry_never_raises_index_error(self) -> None:
        with self.assertRaises(ProtocolError):
            validate_response({"methodResponses": [["MaskedEmail/get/error"]]})

    def test_non_list_entry_is_malformed(self) -> None:
        with self.assertRaises(MalformedEntryError):
            validate_response({"methodResponses": ["oops"]})
        with self.assertRaises(MalformedEntryError):
            validate_response({"methodResponses": [[42, {}]]})
        with self.assertRaises(MalformedEntryError):
            validate_response(["not", "an", "object"])

    def test_method_error_with_type(self) -> None:
        reply = {
            "methodResponses": [
                ["MaskedEmail/get/error", {"type": "accountNotFound", "message": "no such account"}, "c0"]
            ]
        }
        with self.assertRaises(MethodError) as ctx:
            validate_response(reply)
        self.assertEqual(ctx.exception.method_name, "MaskedEmail/get/error")
        self.assertEqual(ctx.exception.error_type, "accountNotFound")
        self.assertEqual(ctx.exception.message, "no such account")
        self.assertIn("accountNotFound - no such account", str(ctx.exception))

    def test_method_error_without_structure_keeps_raw(self) -> None:
        with self.assertRaises(MethodError) as ctx:
            validate_response({"methodResponses": [["error", "boom", "c0"], ["MaskedEmail/set/error", [1, 2]]]})
        self.assertIsNone(ctx.exception.error_type)
        self.assertEqual(ctx.exception.raw, "[1, 2]")

    def test_name_exactly_error_is_not_a_method_error(self) -> None:
        response = validate_response({"methodResponses": [["error", {}, "c0"]]})
        self.assertEqual(len(response.method_responses), 1)


class TestExpectMethodResponse(unittest.TestCase):
    def test_returns_entry(self) -> None:
        response = JMAPResponse(method_responses=[[METHOD_GET, {"list": []}, "c0"]])
        self.assertEqual(expect_method_response(response, 0, 2)[1], {"list": []})
        self.assertEqual(method_result(response), {"list": []})

    def test_empty(self) -> None:
        with self.assertRaises(EmptyResponseError):
            expect_method_response(JMAPResponse(method_responses=[]), 0, 2)

    def test_index_out_of_range(self) -> None:
        response = JMAPResponse(method_responses=[[METHOD_GET, {}]])
        with self.assertRaises(IndexOutOfRangeError):
            expect_method_response(response, 1, 2)
        with self.assertRaises(IndexOutOfRangeError):
            expect_method_response(response, -1, 2)

    def test_too_few_elements(self) -> None:
        response = JMAPResponse(method_responses=[[METHOD_GET]])
        with self.assertRaises(TooFewElementsError) as ctx:
            expect_method_response(response, 0, 2)
        self.assertEqual((ctx.exception.found, ctx.exception.expected), (1, 2))

    def test_method_result_requires_object(self) -> None:
        response = JMAPResponse(method_responses=[[METHOD_GET, "nope"]])
        with self.assertRaises(MalformedEntryError):
            method_result(response)


if __name__ == "__main__":
    unittest.main()
