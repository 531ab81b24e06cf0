from textwrap import dedent
from unittest import TestCase

import pytest

from ts_to_zod import CodeGeneratorConfig, SourceParseError, generate

HERO_SOURCE = """
export type Name = "superman" | "clark kent" | "kal-l";

// Note that the Superman is declared after
export type BadassSuperman = Omit<Superman, "underKryptonite">;

export interface Superman {
  name: Name;
  age: number;
  underKryptonite?: boolean;
  /**
   * @format email
   **/
  email: string;
}

const fly = () => console.log("I can fly!");
"""

VILAIN_SOURCE = """
export interface Vilain {
  name: string;
  powers: string[];
  friends: Vilain[];
}

export interface EvilPlan {
  owner: Vilain;
  description: string;
  details: EvilPlanDetails;
}

export interface EvilPlanDetails {
  parent: EvilPlan; // <- Unsolvable circular reference
  steps: string[];
}
"""


class TestSimpleCase(TestCase):
    def setUp(self):
        self.result = generate(HERO_SOURCE)

    def test_zod_schemas_file(self):
        expected = dedent(
            """\
            // Generated by ts_to_zod
            import { z } from "zod";

            export const nameSchema = z.union([z.literal("superman"), z.literal("clark kent"), z.literal("kal-l")]);

            export const supermanSchema = z.object({
                name: nameSchema,
                age: z.number(),
                underKryptonite: z.boolean().optional(),
                email: z.string().email()
            });

            export const badassSupermanSchema = supermanSchema.omit({ "underKryptonite": true });
            """
        )
        self.assertEqual(self.result.get_zod_schemas_file("./hero"), expected)

    def test_integration_test_file(self):
        expected = dedent(
            """\
            // Generated by ts_to_zod
            import { z } from "zod";

            import * as spec from "./hero";
            import * as generated from "hero.zod";

            // eslint-disable-next-line @typescript-eslint/no-unused-vars
            function expectType<T>(_: T) {
              /* noop */
            }

            export type nameSchemaInferredType = z.infer<typeof generated.nameSchema>;

            export type supermanSchemaInferredType = z.infer<typeof generated.supermanSchema>;

            export type badassSupermanSchemaInferredType = z.infer<typeof generated.badassSupermanSchema>;
            expectType<spec.Name>({} as nameSchemaInferredType)
            expectType<nameSchemaInferredType>({} as spec.Name)
            expectType<spec.Superman>({} as supermanSchemaInferredType)
            expectType<supermanSchemaInferredType>({} as spec.Superman)
            expectType<spec.BadassSuperman>({} as badassSupermanSchemaInferredType)
            expectType<badassSupermanSchemaInferredType>({} as spec.BadassSuperman)
            """
        )
        self.assertEqual(self.result.get_integration_test_file("./hero", "hero.zod"), expected)

    def test_no_errors(self):
        self.assertEqual(self.result.errors, [])
        self.assertFalse(self.result.has_errors)


class TestCircularReferences(TestCase):
    def setUp(self):
        self.result = generate(VILAIN_SOURCE, max_run=3)

    def test_zod_schemas_file(self):
        expected = dedent(
            """\
            // Generated by ts_to_zod
            import { z } from "zod";
            import { Vilain } from "./vilain";

            export const vilainSchema: z.ZodSchema<Vilain> = z.lazy(() => z.object({
                name: z.string(),
                powers: z.array(z.string()),
                friends: z.array(vilainSchema)
            }));
            """
        )
        self.assertEqual(self.result.get_zod_schemas_file("./vilain"), expected)

    def test_integration_test_file(self):
        output = self.result.get_integration_test_file("./vilain", "vilain.zod")
        self.assertIn("export type vilainSchemaInferredType = z.infer<typeof generated.vilainSchema>;\n", output)
        self.assertTrue(
            output.endswith(
                "expectType<spec.Vilain>({} as vilainSchemaInferredType)\n"
                "expectType<vilainSchemaInferredType>({} as spec.Vilain)\n"
            )
        )
        self.assertNotIn("evilPlan", output)

    def test_errors(self):
        self.assertEqual(
            self.result.errors,
            ["Some schemas can't be generated due to circular dependencies:\nevilPlanSchema\nevilPlanDetailsSchema"],
        )


class TestOptions(TestCase):
    def test_name_filter_schema_name_comments_and_strict(self):
        source_text = """export interface Superman {
          /**
           * Name of superman
           */
          name: string;
        }

        export interface Vilain {
          name: string;
          didKillSuperman: true;
        }
        """
        result = generate(
            source_text,
            name_filter=lambda name: name == "Superman",
            get_schema_name=lambda name: name.lower(),
            keep_comments=True,
            strict=True,
        )
        expected = dedent(
            """\
            // Generated by ts_to_zod
            import { z } from "zod";

            export const superman = z.object({
                /**
                 * Name of superman
                 */
                name: z.string()
            }).strict();
            """
        )
        self.assertEqual(result.get_zod_schemas_file("./hero"), expected)
        self.assertEqual(result.ir.excluded, ["Vilain"])

    def test_config_object_and_overrides(self):
        config = CodeGeneratorConfig.from_dict({"schemaNameSuffix": "Validator"})
        result = generate("export type Name = string;", config, add_generation_comment=False)
        self.assertEqual(
            result.get_zod_schemas_file("./hero"),
            'import { z } from "zod";\n\nexport const nameValidator = z.string();\n',
        )
        # The given config is not modified by overrides
        self.assertTrue(config.add_generation_comment)

    def test_schema_name_suffix_override(self):
        result = generate("export type Name = string;", schema_name_suffix="Validator")
        output = result.get_zod_schemas_file("./hero")
        self.assertIn("export const nameValidator = z.string();\n", output)
        self.assertNotIn("nameSchema", output)

    def test_name_pattern_override(self):
        result = generate("export type A = string;\nexport type B = number;\n", name_pattern="^A$")
        output = result.get_zod_schemas_file("./letters")
        self.assertIn("export const aSchema = z.string();\n", output)
        self.assertNotIn("bSchema", output)
        self.assertEqual(result.ir.excluded, ["B"])

    def test_default_tag_keeps_integration_types_equivalent(self):
        result = generate("export interface Hero {\n  /** @default 30 */\n  age?: number;\n}\n")
        self.assertIn("age: z.number().optional()\n", result.get_zod_schemas_file("./hero"))
        self.assertNotIn(".default(", result.get_zod_schemas_file("./hero"))
        self.assertIn("expectType<heroSchemaInferredType>({} as spec.Hero)", result.get_integration_test_file("./hero", "./hero.zod"))

    def test_skip_parse_jsdoc(self):
        source_text = "export interface Hero {\n  /** @minimum 18 */\n  age: number;\n}\n"
        self.assertIn("age: z.number().min(18)", generate(source_text).get_zod_schemas_file("./hero"))
        self.assertIn("age: z.number()\n", generate(source_text, skip_parse_jsdoc=True).get_zod_schemas_file("./hero"))

    def test_schema_comment_kept(self):
        source_text = "/**\n * A hero name\n */\nexport type Name = string;\n"
        output = generate(source_text, keep_comments=True).get_zod_schemas_file("./hero")
        self.assertIn("\n/**\n * A hero name\n */\nexport const nameSchema = z.string();\n", output)


class TestNonExportedTypes(TestCase):
    def test_integration_tests_only_for_exported_schemas(self):
        source_text = HERO_SOURCE.replace("export interface Superman", "interface Superman")
        result = generate(source_text)

        # Schema still generated for non-exported types
        self.assertIn("export const supermanSchema = z.object({", result.get_zod_schemas_file("./source"))

        expected = dedent(
            """\
            // Generated by ts_to_zod
            import { z } from "zod";

            import * as spec from "./source";
            import * as generated from "./source.zod";

            // eslint-disable-next-line @typescript-eslint/no-unused-vars
            function expectType<T>(_: T) {
              /* noop */
            }

            export type nameSchemaInferredType = z.infer<typeof generated.nameSchema>;

            export type badassSupermanSchemaInferredType = z.infer<typeof generated.badassSupermanSchema>;
            expectType<spec.Name>({} as nameSchemaInferredType)
            expectType<nameSchemaInferredType>({} as spec.Name)
            expectType<spec.BadassSuperman>({} as badassSupermanSchemaInferredType)
            expectType<badassSupermanSchemaInferredType>({} as spec.BadassSuperman)
            """
        )
        self.assertEqual(result.get_integration_test_file("./source", "./source.zod"), expected)


class TestErrors(TestCase):
    def test_malformed_tag_is_dropped(self):
        source_text = "export interface Hero {\n  /**\n   * @minimum lots\n   */\n  age: number;\n}\n"
        result = generate(source_text)
        self.assertIn("age: z.number()\n", result.get_zod_schemas_file("./hero"))
        self.assertEqual(result.errors, [])

    def test_unsupported_type_is_reported(self):
        source_text = "export type Keys = keyof Hero;\nexport interface Hero { name: string }\n"
        result = generate(source_text)
        self.assertEqual(len(result.errors), 1)
        self.assertTrue(result.errors[0].startswith("Some schemas can't be generated due to unsupported types:\nkeysSchema ("))
        self.assertNotIn("keysSchema", result.get_zod_schemas_file("./hero"))
        self.assertIn("export const heroSchema", result.get_zod_schemas_file("./hero"))

    def test_syntax_error(self):
        with pytest.raises(SourceParseError):
            generate("export interface Hero { name: ")

    def test_invalid_max_run(self):
        with pytest.raises(ValueError):
            generate("export type Name = string;", max_run=0)

    def test_empty_source(self):
        result = generate("")
        self.assertEqual(result.get_zod_schemas_file("./empty"), '// Generated by ts_to_zod\nimport { z } from "zod";\n')
        self.assertEqual(result.errors, [])
